"""
Generic async CRUD operations shared by every model.

Every write takes ``commit_self``. With ``commit_self=True`` the method
commits on its own; with ``False`` it only flushes so the caller can group
several writes in one transaction (``session.begin()`` or
``run_in_transaction``). SQLAlchemy errors surface as DatabaseException.
"""

from typing import Any, Generic, Sequence, Type, TypeVar

from sqlalchemy import ColumnElement, and_, delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions.types import DatabaseException

T = TypeVar("T")

Filters = dict[str, Any]
Conditions = Sequence[ColumnElement[bool]]


class BaseDB(Generic[T]):
    """CRUD helpers bound to one model with an integer ``id`` primary key."""

    def __init__(self, model: Type[T]):
        self.model = model

    def _error(self, action: str, exc: Exception) -> DatabaseException:
        return DatabaseException(f"Error {action} {self.model.__name__}: {exc}")

    async def _finish(self, session: AsyncSession, commit_self: bool) -> None:
        if commit_self:
            await session.commit()
        else:
            await session.flush()

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_by_id(self, session: AsyncSession, id: int) -> T | None:
        """
        Fetch one row by primary key.

        Returns:
            T | None: The instance, or None if no row has this id.

        Raises:
            DatabaseException: If the query fails.
        """
        try:
            return await session.get(self.model, id)
        except SQLAlchemyError as e:
            raise self._error(f"retrieving id={id} of", e) from e

    async def get_by_filters(
        self,
        session: AsyncSession,
        filters: Filters,
        order_by: Sequence[Any] | None = None,
    ) -> Sequence[T]:
        """
        Fetch every row whose columns equal the given values.

        Args:
            session: The async database session.
            filters: Column name to value, combined with AND.
            order_by: Optional ORDER BY expressions.

        Raises:
            DatabaseException: If a filter names an unknown column or the
                query fails.
        """
        try:
            stmt = select(self.model).filter_by(**filters)
            if order_by:
                stmt = stmt.order_by(*order_by)
            return (await session.scalars(stmt)).all()
        except (SQLAlchemyError, ValueError) as e:
            raise self._error(f"listing with {filters}", e) from e

    async def get_one_by_filters(
        self, session: AsyncSession, filters: Filters
    ) -> T | None:
        try:
            stmt = select(self.model).filter_by(**filters).limit(1)
            return (await session.scalars(stmt)).first()
        except (SQLAlchemyError, ValueError) as e:
            raise self._error(f"retrieving one with {filters}", e) from e

    async def get_one_by_conditions(
        self, session: AsyncSession, conditions: Conditions
    ) -> T | None:
        """First row matching SQL expressions such as ``Model.used.is_(False)``."""
        try:
            stmt = select(self.model).where(and_(*conditions)).limit(1)
            return (await session.scalars(stmt)).first()
        except SQLAlchemyError as e:
            raise self._error("retrieving one by conditions of", e) from e

    async def exists(self, session: AsyncSession, filters: Filters) -> bool:
        try:
            stmt = select(select(self.model).filter_by(**filters).exists())
            return bool(await session.scalar(stmt))
        except (SQLAlchemyError, ValueError) as e:
            raise self._error(f"checking existence with {filters} of", e) from e

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(
        self, session: AsyncSession, data: Filters, commit_self: bool = True
    ) -> T:
        """
        Insert a row and return it with server-side defaults loaded.

        Args:
            session: The async database session.
            data: Column values for the new row.
            commit_self: Commit if True, otherwise only flush.

        Raises:
            DatabaseException: On constraint violations (e.g. a duplicate
                unique email) or any other database error.
        """
        try:
            obj = self.model(**data)
            session.add(obj)
            await self._finish(session, commit_self)
            await session.refresh(obj)
            return obj
        except (SQLAlchemyError, ValueError) as e:
            raise self._error("creating", e) from e

    async def update(
        self,
        session: AsyncSession,
        id: int,
        updates: Filters,
        commit_self: bool = True,
    ) -> T | None:
        """
        Apply ``updates`` to the row with this id.

        The identity map copy, if any, is refreshed from the UPDATE's
        RETURNING row.

        Returns:
            T | None: The updated instance, or None if no row has this id.

        Raises:
            DatabaseException: If the update fails.
        """
        try:
            stmt = (
                update(self.model)
                .where(self.model.id == id)  # type: ignore[attr-defined]
                .values(**updates)
                .returning(self.model)
                .execution_options(populate_existing=True)
            )
            obj = (await session.execute(stmt)).scalar_one_or_none()
            await self._finish(session, commit_self)
            return obj
        except SQLAlchemyError as e:
            raise self._error(f"updating id={id} of", e) from e

    async def delete(
        self, session: AsyncSession, id: int, commit_self: bool = True
    ) -> bool:
        """Delete the row with this id. Returns False if there was none."""
        return (
            await self.delete_by_conditions(
                session,
                [self.model.id == id],  # type: ignore[attr-defined]
                commit_self=commit_self,
            )
            > 0
        )

    async def delete_by_filters(
        self, session: AsyncSession, filters: Filters, commit_self: bool = True
    ) -> int:
        """
        Delete every row whose columns equal the given values.

        Returns:
            int: The number of rows deleted.

        Raises:
            DatabaseException: If a filter names an unknown column or the
                delete fails.
        """
        try:
            conditions = [getattr(self.model, k) == v for k, v in filters.items()]
        except AttributeError as e:
            raise self._error(f"deleting with {filters}", e) from e
        return await self.delete_by_conditions(
            session, conditions, commit_self=commit_self
        )

    async def delete_by_conditions(
        self,
        session: AsyncSession,
        conditions: Conditions,
        commit_self: bool = True,
    ) -> int:
        """
        Delete every row matching the SQL expressions.

        Foreign keys declared with ``ondelete="CASCADE"`` remove dependent
        rows in the same statement. Matching objects already loaded in the
        session are found by primary key, not by evaluating the conditions in
        Python (SQLite hands back naive datetimes).

        Returns:
            int: The number of rows deleted.
        """
        stmt = (
            delete(self.model)
            .where(and_(*conditions))
            .execution_options(synchronize_session="fetch")
        )
        try:
            result = await session.execute(stmt)
            await self._finish(session, commit_self)
            return result.rowcount  # type: ignore[attr-defined]
        except SQLAlchemyError as e:
            raise self._error("deleting by conditions", e) from e


__all__ = ["BaseDB"]
