from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_principal, to_http
from storefront.data.database import get_db
from storefront.domain.errors import ServiceError
from storefront.domain.schemas import ProductOut
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("/", response_model=List[ProductOut])
def get_wishlist(principal: str = Depends(get_principal), db: Session = Depends(get_db)):
    svc = WishlistService(db)
    try:
        return svc.get_wishlist(principal)
    except ServiceError as e:
        raise to_http(e)


@router.post("/{product_id}", status_code=201)
def add_to_wishlist(product_id: int, principal: str = Depends(get_principal), db: Session = Depends(get_db)):
    svc = WishlistService(db)
    try:
        return {"success": True, "message": svc.add_to_wishlist(principal, product_id)}
    except ServiceError as e:
        raise to_http(e)


@router.delete("/{product_id}")
def remove_from_wishlist(product_id: int, principal: str = Depends(get_principal), db: Session = Depends(get_db)):
    svc = WishlistService(db)
    try:
        return {"success": True, "message": svc.remove_from_wishlist(principal, product_id)}
    except ServiceError as e:
        raise to_http(e)
