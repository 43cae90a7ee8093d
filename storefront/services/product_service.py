# storefront/services/product_service.py
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Tuple

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.enums import ProductCategory
from storefront.domain.errors import InvalidInput, ProductNotFound
from storefront.domain.pricing import money
from storefront.repos.product_repo import ProductRepo
from storefront.services.image_client import ImageClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def parse_category(value: str | None) -> ProductCategory:
    """Zamkniety enum zamiast rzutowania - nieznana kategoria to blad walidacji."""
    try:
        return ProductCategory((value or "").strip().upper())
    except ValueError:
        allowed = ", ".join(c.value for c in ProductCategory)
        raise InvalidInput(f"Unknown category '{value}'. Allowed: {allowed}")


def _parse_price(value) -> Decimal:
    try:
        price = money(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInput("Price must be a number")
    if price <= 0:
        raise InvalidInput("Price must be greater than 0")
    return price


def _parse_stock(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInput("Stock must be a non-negative integer")
    return value


def _clean_sizes(sizes: Iterable[str] | None) -> List[str]:
    #kolejnosc rozmiarow ma znaczenie (S, M, L...), duplikaty i puste wycinamy
    cleaned: List[str] = []
    for s in sizes or []:
        s = s.strip()
        if s and s not in cleaned:
            cleaned.append(s)
    return cleaned


class ProductService:
    def __init__(self, db: Session, image_client: ImageClient | None = None):
        self.repo = ProductRepo(db)
        self.image_client = image_client or ImageClient()

    #query
    def list_products(self, category: str | None = None) -> List[ProductModel]:
        if category:
            return self.repo.list_products(parse_category(category).value)
        return self.repo.list_products()

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise ProductNotFound()
        return product

    #commands
    def create_product(
        self,
        name: str,
        description: str,
        price,
        stock: int,
        category: str,
        sizes: Iterable[str] | None = None,
        images: Iterable[Tuple[bytes, str]] = (),
    ) -> ProductModel:
        if not name or not name.strip():
            raise InvalidInput("Name is required")

        parsed_category = parse_category(category)
        parsed_price = _parse_price(price)
        parsed_stock = _parse_stock(stock)

        # upload przed zapisem - produkt bez zdjec nie powstaje jesli image store padl
        urls = []
        for content, file_name in images:
            urls.append(self.image_client.upload(content, file_name))

        product = ProductModel(
            name=name.strip(),
            description=(description or "").strip(),
            price=parsed_price,
            stock=parsed_stock,
            category=parsed_category.value,
            sizes=_clean_sizes(sizes),
            images=urls,
        )
        created = self.repo.save(product)

        logger.info(f"Created product {created.id} ({created.name}) with {len(urls)} images")
        return created

    def update_product(self, product_id: int, **fields) -> ProductModel:
        product = self.get_product(product_id)

        if fields.get("name") is not None:
            if not fields["name"].strip():
                raise InvalidInput("Name is required")
            product.name = fields["name"].strip()
        if fields.get("description") is not None:
            product.description = fields["description"].strip()
        if fields.get("price") is not None:
            product.price = _parse_price(fields["price"])
        if fields.get("stock") is not None:
            product.stock = _parse_stock(fields["stock"])
        if fields.get("category") is not None:
            product.category = parse_category(fields["category"]).value
        if fields.get("sizes") is not None:
            product.sizes = _clean_sizes(fields["sizes"])

        updated = self.repo.save(product)
        logger.info(f"Updated product {updated.id}")
        return updated
