"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time, so configure before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEBUG"] = "false"

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import httpx
import pytest
from sqlalchemy.pool import StaticPool

from cleanbooker.core.security import get_password_hash
from cleanbooker.database import Database
from cleanbooker.main import create_application
from cleanbooker.models.business import Business
from cleanbooker.schemas.booking import BookingCreate
from cleanbooker.schemas.customer import CustomerCreate
from cleanbooker.schemas.service import ServiceCreate
from cleanbooker.services.booking_service import booking_service
from cleanbooker.services.catalog_service import catalog_service
from cleanbooker.services.customer_service import customer_service

ADDRESS = {"street": "42 Elm St", "city": "Springfield", "state": "IL", "zip_code": "62701"}


@pytest.fixture
async def database():
    """In-memory database shared by every session of one test"""
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.connect()
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest.fixture
async def db(database):
    """Transactional session, committed when the test finishes"""
    async with database.session() as session:
        yield session


@pytest.fixture
def app(database):
    return create_application(database=database)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# -- service-level factories ------------------------------------------------


async def make_business(db, name: str = "Sparkle Cleaning") -> Business:
    business = Business(
        business_name=name,
        owner_name="Sam Owner",
        email=f"{uuid4().hex[:8]}@biz-mail.com",
        password_hash=get_password_hash("Password123"),
        phone="5550100100",
        street="1 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
        service_area=["62701"],
    )
    db.add(business)
    await db.flush()
    return business


async def make_service(db, business_id, base_price="100.00", base_duration=60, add_ons=None):
    if add_ons is None:
        add_ons = [
            {"name": "Inside fridge", "price": "20.00", "duration": 15},
            {"name": "Balcony", "price": "10.00", "duration": 5},
        ]
    data = ServiceCreate(
        name="Standard Clean",
        category="REGULAR",
        base_price=Decimal(base_price),
        base_duration=base_duration,
        add_ons=add_ons,
    )
    return await catalog_service.create_service(db, business_id, data)


async def make_customer(db, business_id, email: str | None = None):
    data = CustomerCreate(
        first_name="Jordan",
        last_name="Lee",
        email=email or f"{uuid4().hex[:8]}@example.com",
        phone="5550123456",
        address=ADDRESS,
    )
    return await customer_service.create_customer(db, business_id, data)


async def make_booking(db, business_id, customer, service, add_on_ids=None):
    data = BookingCreate(
        customer_id=customer.id,
        service_id=service.id,
        add_on_ids=add_on_ids or [],
        scheduled_date=datetime.now(UTC) + timedelta(days=1),
    )
    return await booking_service.create_booking(db, business_id, data)


@pytest.fixture
async def business(db):
    return await make_business(db)


@pytest.fixture
async def other_business(db):
    return await make_business(db, name="Rival Maids")


@pytest.fixture
async def service(db, business):
    return await make_service(db, business.id)


@pytest.fixture
async def customer(db, business):
    return await make_customer(db, business.id)


# -- API helpers --------------------------------------------------------------


def registration_payload(email: str | None = None, name: str = "Sparkle Cleaning") -> dict:
    return {
        "business_name": name,
        "owner_name": "Sam Owner",
        "email": email or f"{uuid4().hex[:8]}@biz-mail.com",
        "password": "Password123",
        "phone": "5550100100",
        "address": ADDRESS,
        "service_area": ["62701"],
    }


async def register(client, email: str | None = None, name: str = "Sparkle Cleaning") -> dict:
    response = await client.post(
        "/api/v1/auth/register", json=registration_payload(email, name)
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
async def auth_headers(client):
    tokens = await register(client)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.fixture
async def other_auth_headers(client):
    tokens = await register(client, name="Rival Maids")
    return {"Authorization": f"Bearer {tokens['access_token']}"}


# Test markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
