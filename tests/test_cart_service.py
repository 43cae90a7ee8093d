from decimal import Decimal

import pytest

from storefront.domain.errors import InsufficientStock, InvalidInput, NotFound, ProductNotFound, UserNotFound
from storefront.services.cart_service import CartService


def test_add_creates_cart_lazily(db, make_user, make_product):
    make_user()
    p = make_product(price="300", stock=5)

    cart = CartService(db).add_to_cart("user_1", p.id, 2)

    assert cart["cart_id"] is not None
    assert [(i.product_id, i.quantity) for i in cart["items"]] == [(p.id, 2)]
    assert cart["subtotal"] == Decimal("600.00")
    assert cart["shipping"] == Decimal("50.00")
    assert cart["total"] == Decimal("650.00")


def test_add_merges_quantity(db, make_user, make_product, stock_of):
    make_user()
    p = make_product(stock=5)
    svc = CartService(db)

    svc.add_to_cart("user_1", p.id, 2)
    cart = svc.add_to_cart("user_1", p.id, 3)

    assert len(cart["items"]) == 1
    assert cart["items"][0].quantity == 5
    # koszyk nie rezerwuje stanu
    assert stock_of(p.id) == 5


def test_merged_quantity_cannot_exceed_stock(db, make_user, make_product):
    make_user()
    p = make_product("Mug", stock=4)
    svc = CartService(db)
    svc.add_to_cart("user_1", p.id, 3)

    with pytest.raises(InsufficientStock) as exc:
        svc.add_to_cart("user_1", p.id, 2)

    assert exc.value.available == 4
    assert exc.value.requested == 5
    assert svc.get_cart_quantity("user_1") == 3


@pytest.mark.parametrize("quantity", [0, -1])
def test_add_rejects_non_positive_quantity(db, make_user, make_product, quantity):
    make_user()
    with pytest.raises(InvalidInput):
        CartService(db).add_to_cart("user_1", make_product().id, quantity)


def test_add_unknown_product_or_user(db, make_user, make_product):
    with pytest.raises(UserNotFound):
        CartService(db).add_to_cart("nobody", 1, 1)

    make_user()
    with pytest.raises(ProductNotFound):
        CartService(db).add_to_cart("user_1", 999, 1)


def test_add_rejects_unknown_size(db, make_user, make_product):
    make_user()
    p = make_product(sizes=["S", "M"])

    with pytest.raises(InvalidInput):
        CartService(db).add_to_cart("user_1", p.id, 1, "XXL")


def test_remove_and_count(db, make_user, make_product):
    make_user()
    a, b = make_product("A"), make_product("B")
    svc = CartService(db)
    svc.add_to_cart("user_1", a.id, 1)
    svc.add_to_cart("user_1", b.id, 2)
    assert svc.get_cart_quantity("user_1") == 3

    cart = svc.remove_from_cart("user_1", a.id)

    assert [i.product_id for i in cart["items"]] == [b.id]
    with pytest.raises(NotFound):
        svc.remove_from_cart("user_1", a.id)


def test_empty_cart_view(db, make_user):
    make_user()
    cart = CartService(db).get_cart("user_1")

    assert cart["items"] == []
    assert cart["total"] == Decimal("0.00")
    assert CartService(db).get_cart_quantity("user_1") == 0
