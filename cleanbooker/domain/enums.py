"""Enumerations shared by models, schemas and services."""

from enum import Enum


class ServiceCategory(str, Enum):
    """Kinds of cleaning service a business can offer."""

    REGULAR = "REGULAR"
    DEEP = "DEEP"
    MOVE_IN = "MOVE_IN"
    MOVE_OUT = "MOVE_OUT"
    COMMERCIAL = "COMMERCIAL"
    POST_CONSTRUCTION = "POST_CONSTRUCTION"


class CustomerStatus(str, Enum):
    """Customer lifecycle status."""

    POTENTIAL = "POTENTIAL"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class PropertyType(str, Enum):
    HOUSE = "HOUSE"
    APARTMENT = "APARTMENT"
    OFFICE = "OFFICE"
    COMMERCIAL = "COMMERCIAL"


class ContactMethod(str, Enum):
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    SMS = "SMS"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHECK = "CHECK"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    REFUNDED = "REFUNDED"


class RecurrenceType(str, Enum):
    """How often a booking repeats."""

    NONE = "NONE"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
