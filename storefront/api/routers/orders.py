# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_principal, get_order_service, unwrap
from storefront.domain.schemas import ActionResult, PlaceOrderIn
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=ActionResult, status_code=201)
def place_order(
    payload: PlaceOrderIn,
    principal: str = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    """
    Checkout koszyka - zamowienie + zdjecie ze stanu + czyszczenie koszyka.
    """
    return unwrap(svc.place_order(principal, payload.address, payload.contact_no))


@router.get("/", response_model=ActionResult)
def list_orders(
    principal: str = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    return unwrap(svc.get_user_orders(principal))


@router.get("/{order_id}", response_model=ActionResult)
def get_order(
    order_id: int,
    principal: str = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    return unwrap(svc.get_order(principal, order_id))


@router.post("/{order_id}/cancel", response_model=ActionResult)
def cancel_order(
    order_id: int,
    principal: str = Depends(get_principal),
    svc: OrderService = Depends(get_order_service),
):
    return unwrap(svc.cancel_order(principal, order_id))
