from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import delete as sa_delete
from sqlalchemy import select
from sqlalchemy import update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import InstrumentedAttribute

T = TypeVar("T")  # SQLAlchemy model class (Declarative)


class BaseRepository(Generic[T]):
    """
    Common async repository for one declarative model.
    - Filters are equality conditions on mapped attribute names.
    - commit/rollback is the caller's job (service layer); writes only flush.
    """

    def __init__(self, model: type[T]) -> None:
        self.model = model

    # ------------------------ Read ------------------------

    async def get_by(self, session: AsyncSession, **filters: Any) -> T | None:
        """First row matching every filter, reloaded from the database."""
        stmt = (
            select(self.model)
            .filter_by(**filters)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        res = await session.execute(stmt)
        return res.scalars().first()

    async def list(
        self,
        session: AsyncSession,
        *,
        where: dict[str, Any] | None = None,
        order_by: Sequence[InstrumentedAttribute] | None = None,
    ) -> list[T]:
        stmt = select(self.model)
        if where:
            stmt = stmt.filter_by(**where)
        if order_by:
            stmt = stmt.order_by(*order_by)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    # ------------------------ Write ------------------------

    async def create(self, session: AsyncSession, obj: T) -> T:
        """Insert a new (transient) instance and flush so the PK is assigned."""
        if not sa_inspect(obj).transient:
            raise ValueError("create(): expected a transient (new) SQLAlchemy model instance")
        session.add(obj)
        await session.flush()
        await session.refresh(obj)
        return obj

    async def update_where(
        self,
        session: AsyncSession,
        filters: dict[str, Any],
        values: dict[str, Any],
    ) -> int:
        """Single UPDATE restricted by ``filters``; returns the matched row count."""
        stmt = (
            sa_update(self.model)
            .filter_by(**filters)
            .values({getattr(self.model, key): value for key, value in values.items()})
            .execution_options(synchronize_session=False)
        )
        res = await session.execute(stmt)
        return res.rowcount or 0

    async def delete_where(self, session: AsyncSession, **filters: Any) -> int:
        """Single DELETE restricted by ``filters``; returns the deleted row count."""
        stmt = (
            sa_delete(self.model)
            .filter_by(**filters)
            .execution_options(synchronize_session=False)
        )
        res = await session.execute(stmt)
        return res.rowcount or 0
