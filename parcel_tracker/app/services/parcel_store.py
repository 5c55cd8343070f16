"""
Parcel store service.

Durable CRUD over the parcel table. Each public operation issues exactly one
SQL statement and commits it; engine errors are surfaced as StorageError.
"""

from typing import List, NoReturn

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_tracker.app.core.exceptions import (
    InvalidTransitionError,
    ParcelNotFoundError,
    StorageError,
)
from parcel_tracker.app.core.observability import logger, track_operation
from parcel_tracker.app.models.parcel import Parcel
from parcel_tracker.app.models.parcel_enums import ParcelStatus
from parcel_tracker.app.schemas.parcel import ParcelBase, ParcelResponse

REGISTERED = ParcelStatus.REGISTERED.value


class ParcelStore:
    """
    Mapping between parcel records and rows of the `parcel` table.

    Built from an already-open session; opening, closing and schema
    creation belong to the caller. The store keeps no state of its own.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, parcel: ParcelBase) -> int:
        """
        Insert a new parcel and return its assigned number.

        Args:
            parcel: Record to store (client, status, address, created_at)

        Returns:
            Engine-assigned parcel number

        Raises:
            StorageError: If the insert violates a constraint or the connection fails
        """
        async with track_operation("add", client=parcel.client) as log_data:
            row = Parcel(
                client=parcel.client,
                status=parcel.status,
                address=parcel.address,
                created_at=parcel.created_at,
            )
            try:
                self.db.add(row)
                await self.db.flush()
                number = row.number
                await self.db.commit()
            except SQLAlchemyError as exc:
                await self._fail("add", exc)

            log_data["number"] = number
            return number

    async def get(self, number: int) -> ParcelResponse:
        """
        Fetch one parcel by number.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            StorageError: On engine failure
        """
        async with track_operation("get", number=number):
            try:
                result = await self.db.execute(
                    select(Parcel)
                    .where(Parcel.number == number)
                    .execution_options(populate_existing=True)
                )
                row = result.scalar_one_or_none()
            except SQLAlchemyError as exc:
                await self._fail("get", exc)

            if row is None:
                raise ParcelNotFoundError(number)

            return ParcelResponse.model_validate(row)

    async def get_by_client(self, client: int) -> List[ParcelResponse]:
        """
        Fetch every parcel owned by a client.

        Returns an empty list when the client has none. Ordered by number,
        though callers should not depend on it.
        """
        async with track_operation("get_by_client", client=client) as log_data:
            try:
                result = await self.db.execute(
                    select(Parcel)
                    .where(Parcel.client == client)
                    .order_by(Parcel.number)
                    .execution_options(populate_existing=True)
                )
                rows = result.scalars().all()
            except SQLAlchemyError as exc:
                await self._fail("get_by_client", exc)

            log_data["count"] = len(rows)
            return [ParcelResponse.model_validate(row) for row in rows]

    async def set_address(self, number: int, address: str) -> None:
        """
        Change the delivery address of a parcel that is still registered.

        The status check and the write are one conditional UPDATE.

        Raises:
            ValueError: If address is empty
            ParcelNotFoundError: If no parcel has this number
            InvalidTransitionError: If the parcel has left the registered state
            StorageError: On engine failure
        """
        if not address:
            raise ValueError("address must be a non-empty string")

        async with track_operation("set_address", number=number):
            stmt = (
                update(Parcel)
                .where(Parcel.number == number, Parcel.status == REGISTERED)
                .values(address=address)
            )
            await self._execute_guarded("set_address", number, stmt)

    async def set_status(self, number: int, status: str) -> None:
        """
        Set the status label of a parcel. Any non-empty label is accepted.

        Raises:
            ValueError: If status is empty
            ParcelNotFoundError: If no parcel has this number
            StorageError: On engine failure
        """
        if isinstance(status, ParcelStatus):
            status = status.value
        if not status:
            raise ValueError("status must be a non-empty string")

        async with track_operation("set_status", number=number, status=status):
            try:
                result = await self.db.execute(
                    update(Parcel)
                    .where(Parcel.number == number)
                    .values(status=status)
                )
                affected = result.rowcount
                if affected == 0:
                    await self.db.rollback()
                else:
                    await self.db.commit()
            except SQLAlchemyError as exc:
                await self._fail("set_status", exc)

            if affected == 0:
                raise ParcelNotFoundError(number)

    async def delete(self, number: int) -> None:
        """
        Remove a parcel that is still registered.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            InvalidTransitionError: If the parcel has left the registered state
            StorageError: On engine failure
        """
        async with track_operation("delete", number=number):
            stmt = delete(Parcel).where(Parcel.number == number, Parcel.status == REGISTERED)
            await self._execute_guarded("delete", number, stmt)

    async def _execute_guarded(self, operation: str, number: int, stmt) -> None:
        """
        Run a statement conditioned on the registered status.

        Zero affected rows means either the parcel is missing or its status
        disqualifies it; a follow-up read tells the two apart.
        """
        try:
            result = await self.db.execute(stmt)
            if result.rowcount > 0:
                await self.db.commit()
                return

            current = await self.db.execute(
                select(Parcel.status).where(Parcel.number == number)
            )
            status = current.scalar_one_or_none()
            await self.db.rollback()
        except SQLAlchemyError as exc:
            await self._fail(operation, exc)

        if status is None:
            raise ParcelNotFoundError(number)
        raise InvalidTransitionError(number, operation, status)

    async def _fail(self, operation: str, exc: SQLAlchemyError) -> NoReturn:
        try:
            await self.db.rollback()
        except SQLAlchemyError as rollback_exc:
            # The original failure is the one reported
            logger.warning(
                "Rollback Failed",
                extra={"operation": operation, "error": str(rollback_exc)}
            )
        raise StorageError(
            message=f"Parcel {operation} failed: {exc.__class__.__name__}",
            details={"operation": operation, "error": str(exc)}
        ) from exc
