"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from cleanbooker.api.v1 import auth, bookings, customers, employees, services

api_router = APIRouter()

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Customers
api_router.include_router(customers.router, prefix="/customers", tags=["Customers"])

# Service catalog
api_router.include_router(services.router, prefix="/services", tags=["Services"])

# Bookings
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

# Employees
api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
