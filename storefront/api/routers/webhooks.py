# storefront/api/routers/webhooks.py
import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from svix.webhooks import Webhook, WebhookVerificationError

from storefront.data.database import get_db
from storefront.domain.errors import ServiceError
from storefront.services.user_service import UserService
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


async def raw_body(request: Request) -> bytes:
    #podpis liczony jest z surowego body, nie z przeparsowanego jsona
    return await request.body()


@router.post("/identity", response_class=PlainTextResponse)
def identity_webhook(
    request: Request,
    body: bytes = Depends(raw_body),
    db: Session = Depends(get_db),
):
    """
    Zdarzenia user.created / user.updated od dostawcy tozsamosci, podpisane przez svix.
    Sync handler - praca na sesji SQLAlchemy idzie w threadpoolu FastAPI.
    """
    if not settings.WEBHOOK_SECRET:
        logger.error("WEBHOOK_SECRET is not defined")
        return PlainTextResponse("Webhook secret not configured", status_code=500)

    svix_headers = {
        "svix-id": request.headers.get("svix-id"),
        "svix-timestamp": request.headers.get("svix-timestamp"),
        "svix-signature": request.headers.get("svix-signature"),
    }
    if not all(svix_headers.values()):
        return PlainTextResponse("Error occurred -- no svix headers", status_code=400)

    try:
        payload = json.loads(body)
    except ValueError:
        return PlainTextResponse("Invalid JSON payload", status_code=400)
    if not isinstance(payload, dict):
        return PlainTextResponse("Invalid JSON payload", status_code=400)

    # verify tylko sprawdza podpis, w svix 2.x nic nie zwraca
    try:
        Webhook(settings.WEBHOOK_SECRET).verify(body, svix_headers)
    except WebhookVerificationError as e:
        logger.warning(f"Error verifying webhook: {e}")
        return PlainTextResponse("Error occurred during verification", status_code=400)

    event_type = payload.get("type") or ""
    svc = UserService(db)
    try:
        message = svc.handle_identity_event(event_type, payload.get("data") or {})
    except ServiceError as e:
        logger.error(f"Failed to handle {event_type}: {e.message}")
        return PlainTextResponse(e.message, status_code=e.status_code)

    return PlainTextResponse(message, status_code=200)
