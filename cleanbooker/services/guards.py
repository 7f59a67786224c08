"""Tenant isolation checks shared by the entity services.

Every single-entity lookup goes through :func:`get_owned`, which filters on
both the id and the caller's business. A row that exists under another
business is indistinguishable from one that does not exist at all.
"""

from collections.abc import Sequence
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from cleanbooker.core.exceptions import ConflictError, NotFoundError

ModelT = TypeVar("ModelT")


async def get_owned(
    db: AsyncSession,
    model: type[ModelT],
    entity_id: UUID,
    business_id: UUID,
    resource: str,
    options: Sequence[ORMOption] = (),
) -> ModelT:
    """Load ``model`` by id within ``business_id`` or raise NotFoundError."""
    query = select(model).where(
        model.id == entity_id,  # type: ignore[attr-defined]
        model.business_id == business_id,  # type: ignore[attr-defined]
    )
    if options:
        query = query.options(*options)
    result = await db.execute(query)
    entity = result.scalar_one_or_none()
    if entity is None:
        raise NotFoundError(resource, str(entity_id))
    return entity


async def ensure_email_available(
    db: AsyncSession,
    model: type[Any],
    email: str,
    message: str,
    business_id: UUID | None = None,
    exclude_id: UUID | None = None,
) -> None:
    """Raise ConflictError if ``email`` is taken.

    With ``business_id`` the check is scoped to that business; without it the
    check is global.
    """
    query = select(func.count()).select_from(model).where(
        func.lower(model.email) == email.lower()
    )
    if business_id is not None:
        query = query.where(model.business_id == business_id)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    if (await db.execute(query)).scalar_one():
        raise ConflictError(message)


async def count_dependents(db: AsyncSession, column: Any, entity_id: UUID) -> int:
    """Count rows whose foreign key ``column`` points at ``entity_id``."""
    result = await db.execute(select(func.count()).where(column == entity_id))
    return result.scalar_one()


async def flush_unique(db: AsyncSession, message: str) -> None:
    """Flush pending rows, reporting a unique-constraint violation as ConflictError.

    Covers the window between :func:`ensure_email_available` and the insert,
    where a concurrent request can claim the same email first.
    """
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(message) from exc
