"""Database models."""

from cleanbooker.models.booking import Booking, BookingAddOn
from cleanbooker.models.business import Business, Employee, RefreshToken
from cleanbooker.models.customer import Customer, CustomerNote
from cleanbooker.models.review import Review
from cleanbooker.models.service import AddOn, Service

__all__ = [
    # Tenant
    "Business",
    "Employee",
    "RefreshToken",
    # Customers
    "Customer",
    "CustomerNote",
    # Catalog
    "Service",
    "AddOn",
    # Booking
    "Booking",
    "BookingAddOn",
    # Review
    "Review",
]
