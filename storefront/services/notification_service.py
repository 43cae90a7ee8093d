# storefront/services/notification_service.py
import smtplib
from decimal import Decimal
from email.message import EmailMessage

from storefront.celery_worker import celery_app
from storefront.utils.retry import smtp_retry
from storefront.utils.settings import (
    SMTP_HOST,
    SMTP_PORT,
    SMTP_USER,
    SMTP_PASSWORD,
    EMAIL_FROM,
    STORE_NAME,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania - zamowienie nie czeka na maila.
    """

    @staticmethod
    def send_order_confirmation(
        email: str,
        name: str,
        order_id: int,
        total: Decimal,
        address: str,
        contact_no: str,
    ):
        # Decimal nie przejdzie przez json serializer celery
        send_order_confirmation_task.delay(email, name, order_id, str(total), address, contact_no)


def build_order_confirmation(
    email: str,
    name: str,
    order_id: int,
    total: str,
    address: str,
    contact_no: str,
) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = f"Order Confirmation #{order_id} - {STORE_NAME}"
    msg["From"] = EMAIL_FROM
    msg["To"] = email

    msg.set_content(
        f"Order Confirmation - {STORE_NAME}\n\n"
        f"Hello {name},\n\n"
        f"Thank you for your order! Your order #{order_id} has been successfully placed.\n\n"
        f"Order Details:\n"
        f"- Order ID: #{order_id}\n"
        f"- Total Amount: {total}\n"
        f"- Delivery Address: {address}\n"
        f"- Contact Number: {contact_no}\n\n"
        f"What's Next?\n"
        f"- Your order is being processed\n"
        f"- Expected delivery: 7 business days\n\n"
        f"If you have any questions about your order, please contact us at {EMAIL_FROM}\n\n"
        f"Thank you for choosing {STORE_NAME}!\n"
    )
    msg.add_alternative(
        f"""\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h1>{STORE_NAME}</h1>
  <h2>Order Confirmed!</h2>
  <p>Hello {name},</p>
  <p>Your order has been successfully placed and will be shipped to you soon.</p>
  <table>
    <tr><td><b>Order ID:</b></td><td>#{order_id}</td></tr>
    <tr><td><b>Total Amount:</b></td><td>{total}</td></tr>
    <tr><td><b>Delivery Address:</b></td><td>{address}</td></tr>
    <tr><td><b>Contact Number:</b></td><td>{contact_no}</td></tr>
  </table>
  <p>Expected delivery: 7 business days.</p>
  <p>Need help with your order? <a href="mailto:{EMAIL_FROM}">Contact Support</a></p>
</div>
""",
        subtype="html",
    )
    return msg


@smtp_retry()
def _deliver(msg: EmailMessage):
    with smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=10) as smtp:
        smtp.starttls()
        if SMTP_USER:
            smtp.login(SMTP_USER, SMTP_PASSWORD)
        smtp.send_message(msg)


@celery_app.task(name="storefront.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(
    email: str,
    name: str,
    order_id: int,
    total: str,
    address: str,
    contact_no: str,
):
    """
    Celery task - wysyla maila z potwierdzeniem zamowienia przez SMTP relay.
    Bez skonfigurowanego SMTP_HOST tylko loguje.
    """
    if not email:
        logger.warning(f"[NOTIFICATION] Order {order_id}: user has no email, skipping")
        return {"order_id": order_id, "status": "skipped"}

    if not SMTP_HOST:
        logger.info(f"[NOTIFICATION] SMTP not configured, order {order_id} confirmation for {email} not sent")
        return {"order_id": order_id, "status": "skipped"}

    _deliver(build_order_confirmation(email, name, order_id, total, address, contact_no))
    logger.info(f"[NOTIFICATION] Order confirmation for order {order_id} sent to {email}")

    return {"order_id": order_id, "status": "sent"}
