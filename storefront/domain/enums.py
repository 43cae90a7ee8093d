# storefront/domain/enums.py
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class ProductCategory(str, Enum):
    CLOTHING = "CLOTHING"
    ACCESSORIES = "ACCESSORIES"
