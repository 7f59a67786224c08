"""Schemas shared across resources."""

from pydantic import BaseModel, Field


class Address(BaseModel):
    """Postal address as sent by clients."""

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=5, max_length=20)


class ListMeta(BaseModel):
    """Pagination metadata for list responses."""

    total: int
    page: int
    limit: int
    total_pages: int
