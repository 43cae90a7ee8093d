#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_principal, to_http
from storefront.data.database import get_db
from storefront.domain.errors import ServiceError
from storefront.domain.schemas import CartItemIn, CartOut, CartCount
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/", response_model=CartOut)
def get_cart(principal: str = Depends(get_principal), db: Session = Depends(get_db)):
    svc = CartService(db)
    try:
        return svc.get_cart(principal)
    except ServiceError as e:
        raise to_http(e)


@router.get("/count", response_model=CartCount)
def get_cart_count(principal: str = Depends(get_principal), db: Session = Depends(get_db)):
    svc = CartService(db)
    try:
        return CartCount(count=svc.get_cart_quantity(principal))
    except ServiceError as e:
        raise to_http(e)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        return svc.add_to_cart(
            principal,
            product_id=payload.product_id,
            quantity=payload.quantity,
            size=payload.size,
        )
    except ServiceError as e:
        raise to_http(e)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: int,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        return svc.remove_from_cart(principal, product_id)
    except ServiceError as e:
        raise to_http(e)
