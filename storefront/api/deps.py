# storefront/api/deps.py
import hmac

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import ServiceError, NotAuthenticated
from storefront.domain.schemas import ActionResult
from storefront.services.image_client import ImageClient
from storefront.services.order_service import OrderService
from storefront.utils.settings import ADMIN_API_KEY


def get_principal(x_user_id: str | None = Header(None)) -> str:
    """
    Principal ustawiany przez proxy dostawcy tozsamosci.
    Rozwiazywany raz tutaj i przekazywany jawnie do serwisow.
    """
    if not x_user_id or not x_user_id.strip():
        err = NotAuthenticated()
        raise HTTPException(status_code=err.status_code, detail=err.message)
    return x_user_id.strip()


def require_admin(x_admin_key: str | None = Header(None)):
    if ADMIN_API_KEY and not hmac.compare_digest(x_admin_key or "", ADMIN_API_KEY):
        raise HTTPException(status_code=403, detail="Admin access required")


def get_image_client() -> ImageClient:
    return ImageClient()


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def to_http(e: ServiceError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


_STATUS_BY_KIND = {
    cls.kind: cls.status_code
    for cls in ServiceError.__subclasses__()
}


def unwrap(result: ActionResult) -> ActionResult:
    """Nieudany ActionResult -> HTTPException z calym wynikiem jako detail."""
    if not result.success:
        raise HTTPException(
            status_code=_STATUS_BY_KIND.get(result.error, 400),
            detail=result.model_dump(mode="json"),
        )
    return result
