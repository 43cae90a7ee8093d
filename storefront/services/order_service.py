# storefront/services/order_service.py
from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import (
    ServiceError,
    InvalidInput,
    EmptyCart,
    InsufficientStock,
    OrderNotFound,
    NotCancelable,
    AlreadyFinal,
    TransactionFailed,
)
from storefront.domain.pricing import calculate_order_total
from storefront.domain.schemas import ActionResult, OrderConfirmation, OrderOut
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.notification_service import NotificationService
from storefront.services.user_service import resolve_user
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień: checkout koszyka, anulowanie, dostarczenie.
    Kazda operacja zwraca ActionResult - bledy walidacji nie wychodza jako wyjatki.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)
        self.notification_service = notification_service or NotificationService()

    def place_order(self, principal_id: str | None, address: str, contact_no: str) -> ActionResult:
        """
        Use Case: Zamówienie z koszyka.

        Walidacja (pierwszy blad wygrywa, bez zmian w bazie):
        1. user istnieje
        2. adres i telefon niepuste po trim
        3. koszyk istnieje i ma pozycje
        4. dla kazdej pozycji ilosc <= stan produktu

        Potem jedna transakcja: insert_order, insert_order_items, decrement_stock, clear_cart_items.
        Po commicie (best effort): domyslny adres/telefon usera + mail z potwierdzeniem.
        """
        try:
            user = resolve_user(self.users, principal_id)

            address = (address or "").strip()
            contact_no = (contact_no or "").strip()
            if not address:
                raise InvalidInput("Address is required")
            if not contact_no:
                raise InvalidInput("Contact number is required")

            cart = self.carts.get_cart_by_user(user.id)
            items = self.carts.get_cart_items(cart.id) if cart else []
            if not items:
                raise EmptyCart()

            for item in items:
                if item.product.stock < item.quantity:
                    raise InsufficientStock(item.product.name, item.product.stock, item.quantity)

            subtotal, shipping, total = calculate_order_total(
                (i.product.price, i.quantity) for i in items
            )

            # dane do logow i maila zanim commit wygasi obiekty
            user_id, email, name = user.id, user.email, user.full_name

            order_id = self._commit_order(user_id, cart, items, total, address, contact_no)

        except ServiceError as e:
            logger.info(f"Order rejected for principal {principal_id}: {e.kind} - {e.message}")
            return ActionResult.fail(e)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Order transaction failed for principal {principal_id}")
            return ActionResult.fail(TransactionFailed("Failed to place order. Please try again."))

        logger.info(
            f"Order {order_id} placed by user {user_id}: subtotal={subtotal} "
            f"shipping={shipping} total={total}"
        )

        self._save_default_contact(user_id, address, contact_no)
        self._send_confirmation(email, name, order_id, total, address, contact_no)

        return ActionResult.ok(
            "Order placed successfully",
            OrderConfirmation(order_id=order_id, total=total),
        )

    def _commit_order(
        self,
        user_id: int,
        cart: CartModel,
        items: List[CartItemModel],
        total: Decimal,
        address: str,
        contact_no: str,
    ) -> int:
        try:
            # 1. insert_order
            order = self.repo.insert_order(
                OrderModel(
                    user_id=user_id,
                    total_price=total,
                    location=address,
                    contact_no=contact_no,
                    status=OrderStatus.PENDING.value,
                )
            )
            order_id = order.id

            # 2. insert_order_items - snapshot pozycji koszyka
            for item in items:
                self.repo.insert_order_item(
                    OrderItemModel(
                        order_id=order_id,
                        product_id=item.product_id,
                        quantity=item.quantity,
                        size=item.size or "",
                    )
                )

            # 3. decrement_stock - warunkowy update, rowcount 0 = ktos wykupil w miedzyczasie
            # stala kolejnosc po product_id, zeby rownolegle checkouty nie blokowaly sie nawzajem
            for item in sorted(items, key=lambda i: i.product_id):
                if self.products.decrement_stock(item.product_id, item.quantity) == 0:
                    available = self.products.get_stock(item.product_id) or 0
                    raise InsufficientStock(item.product.name, available, item.quantity)

            # 4. clear_cart_items - sam koszyk zostaje
            self.carts.clear_cart(cart.id)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return order_id

    def _save_default_contact(self, user_id: int, address: str, contact_no: str):
        try:
            self.users.update_contact(user_id, address, contact_no)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Failed to save default address for user {user_id}: {e}")

    def _send_confirmation(self, email: str, name: str, order_id: int, total: Decimal, address: str, contact_no: str):
        try:
            self.notification_service.send_order_confirmation(email, name, order_id, total, address, contact_no)
        except Exception as e:
            logger.warning(f"Failed to queue confirmation email for order {order_id}: {e}")

    def cancel_order(self, principal_id: str | None, order_id: int) -> ActionResult:
        """
        Use Case: Anulowanie zamówienia przez wlasciciela.
        Tylko PENDING. Zwraca stan produktow i ustawia CANCELED w jednej transakcji.
        """
        try:
            user = resolve_user(self.users, principal_id)

            order = self.repo.get_user_order(order_id, user.id)
            # brak / cudze / juz zakonczone - jeden ogolny komunikat
            if not order or order.status != OrderStatus.PENDING.value:
                raise NotCancelable()

            items = sorted((i.product_id, i.quantity) for i in order.items)

            try:
                for product_id, quantity in items:
                    self.products.increment_stock(product_id, quantity)

                if self.repo.transition_status(order_id, OrderStatus.PENDING, OrderStatus.CANCELED) == 0:
                    raise NotCancelable()

                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        except ServiceError as e:
            return ActionResult.fail(e)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Cancel transaction failed for order {order_id}")
            return ActionResult.fail(TransactionFailed("Failed to cancel order"))

        logger.info(f"Order {order_id} cancelled, stock restored for {len(items)} items")
        return ActionResult.ok("Order cancelled successfully", {"order_id": order_id})

    def mark_order_delivered(self, order_id: int) -> ActionResult:
        """
        Use Case (admin): PENDING -> COMPLETED. Bez sprawdzania wlasciciela.
        """
        try:
            order = self.repo.get_order(order_id)
            if not order:
                raise OrderNotFound()

            if order.status == OrderStatus.COMPLETED.value:
                raise AlreadyFinal("Order is already completed")
            if order.status == OrderStatus.CANCELED.value:
                raise AlreadyFinal("Cannot update a canceled order")

            if self.repo.transition_status(order_id, OrderStatus.PENDING, OrderStatus.COMPLETED) == 0:
                self.db.rollback()
                raise AlreadyFinal("Order is already finalized")
            self.db.commit()

        except ServiceError as e:
            return ActionResult.fail(e)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to mark order {order_id} as delivered")
            return ActionResult.fail(TransactionFailed("Failed to update order status"))

        logger.info(f"Order {order_id} marked as completed")
        return ActionResult.ok("Order marked as completed", {"order_id": order_id})

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, principal_id: str | None, order_id: int) -> ActionResult:
        try:
            user = resolve_user(self.users, principal_id)
            order = self.repo.get_user_order(order_id, user.id)
            if not order:
                raise OrderNotFound()
            return ActionResult.ok("Order found", OrderOut.model_validate(order))
        except ServiceError as e:
            return ActionResult.fail(e)
        except SQLAlchemyError:
            logger.exception(f"Failed to fetch order {order_id}")
            return ActionResult.fail(TransactionFailed("Failed to fetch order details"))

    def get_user_orders(self, principal_id: str | None) -> ActionResult:
        try:
            user = resolve_user(self.users, principal_id)
            orders = self.repo.list_user_orders(user.id)
            return ActionResult.ok(
                f"{len(orders)} orders",
                [OrderOut.model_validate(o) for o in orders],
            )
        except ServiceError as e:
            return ActionResult.fail(e)
        except SQLAlchemyError:
            logger.exception(f"Failed to fetch orders for principal {principal_id}")
            return ActionResult.fail(TransactionFailed("Failed to fetch orders"))

    def get_all_orders(self) -> ActionResult:
        try:
            orders = self.repo.list_active_orders()
            return ActionResult.ok(
                f"{len(orders)} orders",
                [OrderOut.model_validate(o) for o in orders],
            )
        except SQLAlchemyError:
            logger.exception("Failed to fetch all orders")
            return ActionResult.fail(TransactionFailed("Failed to fetch orders"))
