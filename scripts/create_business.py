#!/usr/bin/env python3
"""Create (or reset) a business account with a properly hashed password."""

import asyncio

from sqlalchemy import select

from cleanbooker.config import settings
from cleanbooker.core.security import get_password_hash
from cleanbooker.database import create_database
from cleanbooker.models.business import Business


async def create_business(
    email: str = "owner@sparkle-cleaning.com",
    password: str = "Sparkle@123",
    business_name: str = "Sparkle Cleaning",
    owner_name: str = "Sam Owner",
    create_tables: bool = False,
) -> None:
    """Create a business if it doesn't exist, otherwise reset its password."""
    database = create_database(settings.sqlalchemy_database_url)
    database.connect()
    try:
        if create_tables:
            await database.create_all()

        async with database.session() as session:
            result = await session.execute(
                select(Business).where(Business.email == email.lower())
            )
            existing = result.scalar_one_or_none()

            if existing:
                existing.password_hash = get_password_hash(password)
                existing.is_active = True
                print(f"Updated existing business: {email}")
            else:
                session.add(
                    Business(
                        business_name=business_name,
                        owner_name=owner_name,
                        email=email.lower(),
                        password_hash=get_password_hash(password),
                        phone="5550100100",
                        street="1 Main St",
                        city="Springfield",
                        state="IL",
                        zip_code="62701",
                        service_area=["62701"],
                        is_verified=True,
                    )
                )
                print(f"Created business: {email}")
    finally:
        await database.dispose()

    print(f"Email: {email}")
    print(f"Password: {password}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create a business account")
    parser.add_argument("--email", default="owner@sparkle-cleaning.com", help="Login email")
    parser.add_argument("--password", default="Sparkle@123", help="Login password")
    parser.add_argument("--business-name", default="Sparkle Cleaning", help="Business name")
    parser.add_argument("--owner-name", default="Sam Owner", help="Owner name")
    parser.add_argument(
        "--create-tables", action="store_true", help="Create missing tables first"
    )

    args = parser.parse_args()

    asyncio.run(
        create_business(
            email=args.email,
            password=args.password,
            business_name=args.business_name,
            owner_name=args.owner_name,
            create_tables=args.create_tables,
        )
    )
