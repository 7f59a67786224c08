"""Business registration, login and refresh-token lifecycle."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cleanbooker.core.exceptions import AuthenticationError, NotFoundError
from cleanbooker.core.security import (
    create_tokens,
    get_password_hash,
    refresh_token_expiry,
    verify_password,
    verify_token,
)
from cleanbooker.models.business import Business, RefreshToken
from cleanbooker.schemas.business import BusinessRegister
from cleanbooker.services.guards import ensure_email_available, flush_unique
from cleanbooker.utils.timezone import as_utc

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Business already exists with this email"


class AuthService:
    """Issues and rotates tokens for businesses."""

    async def _issue_tokens(self, db: AsyncSession, business: Business) -> dict[str, str]:
        tokens = create_tokens(str(business.id), business.email)
        db.add(
            RefreshToken(
                token=tokens["refresh_token"],
                business_id=business.id,
                expires_at=refresh_token_expiry(),
            )
        )
        return tokens

    async def register(
        self, db: AsyncSession, data: BusinessRegister
    ) -> tuple[Business, dict[str, str]]:
        """Create a business account and its first token pair."""
        email = data.email.lower()
        await ensure_email_available(db, Business, email, DUPLICATE_EMAIL)

        business = Business(
            business_name=data.business_name,
            owner_name=data.owner_name,
            email=email,
            password_hash=get_password_hash(data.password),
            phone=data.phone,
            street=data.address.street,
            city=data.address.city,
            state=data.address.state,
            zip_code=data.address.zip_code,
            country=data.address.country,
            service_area=list(data.service_area),
        )
        db.add(business)
        await flush_unique(db, DUPLICATE_EMAIL)

        tokens = await self._issue_tokens(db, business)
        await db.flush()
        await db.refresh(business)

        logger.info(f"Registered business {business.id}")
        return business, tokens

    async def login(
        self, db: AsyncSession, email: str, password: str
    ) -> tuple[Business, dict[str, str]]:
        """Verify credentials and issue a token pair."""
        result = await db.execute(select(Business).where(Business.email == email.lower()))
        business = result.scalar_one_or_none()

        if not business or not business.is_active:
            raise AuthenticationError("Invalid credentials")
        if not verify_password(password, business.password_hash):
            raise AuthenticationError("Invalid credentials")

        tokens = await self._issue_tokens(db, business)
        await db.flush()
        return business, tokens

    async def refresh(self, db: AsyncSession, refresh_token: str) -> dict[str, str]:
        """Rotate a refresh token.

        The old token is revoked and the new one stored in the same
        transaction, so a failure leaves the old token usable.
        """
        verify_token(refresh_token, token_type="refresh")

        result = await db.execute(
            select(RefreshToken).where(RefreshToken.token == refresh_token)
        )
        record = result.scalar_one_or_none()
        if (
            record is None
            or record.is_revoked
            or as_utc(record.expires_at) < datetime.now(UTC)
        ):
            raise AuthenticationError("Invalid refresh token")

        business = await db.get(Business, record.business_id)
        if business is None or not business.is_active:
            raise AuthenticationError("Invalid refresh token")

        record.is_revoked = True
        tokens = await self._issue_tokens(db, business)
        await db.flush()

        logger.info(f"Rotated refresh token for business {business.id}")
        return tokens

    async def logout(
        self, db: AsyncSession, business_id: UUID, refresh_token: str | None
    ) -> None:
        """Revoke ``refresh_token`` if given. Unknown tokens are ignored."""
        if not refresh_token:
            return
        await db.execute(
            update(RefreshToken)
            .where(
                RefreshToken.token == refresh_token,
                RefreshToken.business_id == business_id,
            )
            .values(is_revoked=True)
        )
        logger.info(f"Business {business_id} logged out")

    async def get_active_business(self, db: AsyncSession, business_id: UUID) -> Business:
        """Resolve the business behind an access token."""
        business = await db.get(Business, business_id)
        if business is None or not business.is_active:
            raise AuthenticationError("Invalid or inactive account")
        return business

    async def get_profile(self, db: AsyncSession, business_id: UUID) -> Business:
        business = await db.get(Business, business_id)
        if business is None:
            raise NotFoundError("Business", str(business_id))
        return business


auth_service = AuthService()
