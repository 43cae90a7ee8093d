from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_principal, to_http
from storefront.data.database import get_db
from storefront.domain.errors import ServiceError
from storefront.domain.schemas import UserRead, AddressIn, AddressOut
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def get_me(principal: str = Depends(get_principal), db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_profile(principal)
    except ServiceError as e:
        raise to_http(e)


@router.get("/me/address", response_model=AddressOut)
def get_address(principal: str = Depends(get_principal), db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return AddressOut(address=service.get_default_address(principal))
    except ServiceError as e:
        raise to_http(e)


@router.put("/me/address", response_model=AddressOut)
def set_address(
    payload: AddressIn,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        return AddressOut(address=service.set_default_address(principal, payload.address))
    except ServiceError as e:
        raise to_http(e)
