from typing import Dict, Any

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import InvalidInput, InsufficientStock, ProductNotFound, NotFound
from storefront.domain.pricing import calculate_order_total, ZERO
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.user_service import resolve_user
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case dla koszyka.
    query (get, count) tylko odczyt, commands (add, remove) modyfikuja stan.
    Dodanie do koszyka nie rezerwuje stanu magazynowego - stan schodzi dopiero przy zamowieniu.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    #query
    def get_cart(self, principal_id: str | None) -> Dict[str, Any]:
        user = resolve_user(self.users, principal_id)
        cart = self.repo.get_cart_by_user(user.id)

        items = self.repo.get_cart_items(cart.id) if cart else []
        if not items:
            return {
                "cart_id": cart.id if cart else None,
                "items": [],
                "subtotal": ZERO,
                "shipping": ZERO,
                "total": ZERO,
            }

        subtotal, shipping, total = calculate_order_total(
            (i.product.price, i.quantity) for i in items
        )
        return {
            "cart_id": cart.id,
            "items": items,
            "subtotal": subtotal,
            "shipping": shipping,
            "total": total,
        }

    def get_cart_quantity(self, principal_id: str | None) -> int:
        user = resolve_user(self.users, principal_id)
        cart = self.repo.get_cart_by_user(user.id)
        if not cart:
            return 0
        return sum(i.quantity for i in self.repo.get_cart_items(cart.id))

    #commands
    def add_to_cart(
        self,
        principal_id: str | None,
        product_id: int,
        quantity: int = 1,
        size: str | None = None,
    ) -> Dict[str, Any]:
        if not product_id or quantity <= 0:
            raise InvalidInput("Invalid product or quantity")

        user = resolve_user(self.users, principal_id)

        product = self.products.get_product(product_id)
        if not product:
            raise ProductNotFound()

        size = size.strip() if size and size.strip() else None
        if size and product.sizes and size not in product.sizes:
            raise InvalidInput(f"Size '{size}' is not available for {product.name}")

        try:
            #koszyk tworzony leniwie przy pierwszym dodaniu
            cart = self.repo.get_cart_by_user(user.id)
            if not cart:
                cart = self.repo.create_cart(CartModel(user_id=user.id))
                logger.info(f"Created cart {cart.id} for user {user.id}")

            # unikalne (cart, product) - ilosc doliczamy do istniejacej pozycji
            existing_item = self.repo.get_cart_item(cart.id, product_id)
            new_quantity = quantity + (existing_item.quantity if existing_item else 0)

            if new_quantity > product.stock:
                raise InsufficientStock(product.name, product.stock, new_quantity)

            if existing_item:
                logger.info(
                    f"Product {product_id} already in cart {cart.id}, quantity "
                    f"{existing_item.quantity} -> {new_quantity}"
                )
                existing_item.quantity = new_quantity
                if size:
                    existing_item.size = size
                self.repo.add_cart_item(existing_item)
            else:
                logger.info(f"Adding product {product_id} x{quantity} to cart {cart.id}")
                self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        product_id=product_id,
                        quantity=quantity,
                        size=size,
                    )
                )

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        return self.get_cart(principal_id)

    def remove_from_cart(self, principal_id: str | None, product_id: int) -> Dict[str, Any]:
        user = resolve_user(self.users, principal_id)
        cart = self.repo.get_cart_by_user(user.id)

        if not cart or self.repo.delete_cart_item(cart.id, product_id) == 0:
            raise NotFound("Product not in cart")

        self.repo.commit()
        logger.info(f"Removed product {product_id} from cart {cart.id}")

        return self.get_cart(principal_id)
