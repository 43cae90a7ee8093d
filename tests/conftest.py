import os

# baza w pamieci zanim cokolwiek zaimportuje settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("ADMIN_API_KEY", None)
os.environ.pop("SMTP_HOST", None)

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import ProductModel, UserModel
from storefront.domain.enums import ProductCategory
from storefront.main import app
from storefront.services.cart_service import CartService
from storefront.services.notification_service import NotificationService


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Zamiast celery .delay zbieramy wywolania do listy."""
    sent = []

    def fake_send(email, name, order_id, total, address, contact_no):
        sent.append(
            {
                "email": email,
                "name": name,
                "order_id": order_id,
                "total": total,
                "address": address,
                "contact_no": contact_no,
            }
        )

    monkeypatch.setattr(NotificationService, "send_order_confirmation", staticmethod(fake_send))
    return sent


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(external_id="user_1", email="jane@example.com", full_name="Jane Doe"):
        user = UserModel(external_id=external_id, email=email, full_name=full_name)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_product(db):
    def _make(name="Product", price="100.00", stock=10, category=ProductCategory.CLOTHING, sizes=None):
        product = ProductModel(
            name=name,
            description=f"{name} description",
            price=Decimal(price),
            stock=stock,
            category=category.value,
            sizes=sizes or [],
            images=[],
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def fill_cart(db):
    def _fill(principal_id, *entries):
        """entries: (product, quantity) albo (product, quantity, size)"""
        svc = CartService(db)
        for entry in entries:
            product, quantity = entry[0], entry[1]
            size = entry[2] if len(entry) > 2 else None
            svc.add_to_cart(principal_id, product.id, quantity, size)

    return _fill


@pytest.fixture
def stock_of(db):
    def _stock(product_id) -> int:
        db.expire_all()
        return db.get(ProductModel, product_id).stock

    return _stock
