# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, init_db
from storefront.data.models import ProductModel
from storefront.domain.enums import ProductCategory

DEMO_PRODUCTS = [
    {"name": "Cotton Panjabi", "price": Decimal("1450.00"), "stock": 12, "category": ProductCategory.CLOTHING, "sizes": ["S", "M", "L", "XL"]},
    {"name": "Printed T-Shirt", "price": Decimal("300.00"), "stock": 40, "category": ProductCategory.CLOTHING, "sizes": ["M", "L"]},
    {"name": "Jute Tote Bag", "price": Decimal("150.00"), "stock": 25, "category": ProductCategory.ACCESSORIES, "sizes": []},
]


def seed(db=None) -> int:
    """Katalog demo do lokalnego uruchomienia. Zwraca liczbe dodanych produktow."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return 0
        for p in DEMO_PRODUCTS:
            db.add(
                ProductModel(
                    name=p["name"],
                    description=f"{p['name']} (demo)",
                    price=p["price"],
                    stock=p["stock"],
                    category=p["category"].value,
                    sizes=list(p["sizes"]),
                    images=[],
                )
            )
        db.commit()
        return len(DEMO_PRODUCTS)
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    init_db()
    print(f"Seeded {seed()} products")
