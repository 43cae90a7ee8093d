# storefront/domain/errors.py

class ServiceError(Exception):
    """
    Blad domenowy - walidacja albo stan, ktory nie pozwala wykonac use case.
    kind trafia do odpowiedzi, status_code uzywaja routery.
    """

    kind = "ServiceError"
    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotAuthenticated(ServiceError):
    kind = "NotAuthenticated"
    status_code = 401
    default_message = "Authentication required"


class UserNotFound(ServiceError):
    kind = "UserNotFound"
    status_code = 404
    default_message = "User not found"


class InvalidInput(ServiceError):
    kind = "InvalidInput"
    status_code = 400


class EmptyCart(ServiceError):
    kind = "EmptyCart"
    status_code = 400
    default_message = "Cart is empty"


class InsufficientStock(ServiceError):
    kind = "InsufficientStock"
    status_code = 409

    def __init__(self, product_name: str, available: int, requested: int):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}. "
            f"Available: {available}, Requested: {requested}"
        )


class ProductNotFound(ServiceError):
    kind = "ProductNotFound"
    status_code = 404
    default_message = "Product not found"


class OrderNotFound(ServiceError):
    kind = "OrderNotFound"
    status_code = 404
    default_message = "Order not found"


class NotCancelable(ServiceError):
    kind = "NotCancelable"
    status_code = 409
    default_message = "Only pending orders can be cancelled"


class AlreadyFinal(ServiceError):
    kind = "AlreadyFinal"
    status_code = 409


class AlreadyInWishlist(ServiceError):
    kind = "AlreadyInWishlist"
    status_code = 409
    default_message = "Product already in wishlist"


class NotFound(ServiceError):
    kind = "NotFound"
    status_code = 404
    default_message = "Not found"


class TransactionFailed(ServiceError):
    kind = "TransactionFailed"
    status_code = 500
    default_message = "Failed to process the request. Please try again."
