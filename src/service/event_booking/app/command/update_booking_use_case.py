from datetime import datetime, timezone
from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_booking.domain.entity.booking_entity import (
    IMMUTABLE_BOOKING_FIELDS,
    Booking,
    BookingStatus,
)


class UpdateBookingUseCase:
    """
    Owner-side booking update. The only supported change is cancellation.

    Cancelling claims the status first with a conditional update, then returns
    the seats. Two concurrent cancels therefore release seats exactly once.
    """

    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        booking_command_repo: IBookingCommandRepo,
        event_command_repo: IEventCommandRepo,
        lifecycle_sweeper: SweepLifecycleUseCase,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.booking_command_repo = booking_command_repo
        self.event_command_repo = event_command_repo
        self.lifecycle_sweeper = lifecycle_sweeper

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        lifecycle_sweeper: SweepLifecycleUseCase = Depends(Provide[Container.lifecycle_sweeper]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            booking_command_repo=booking_command_repo,
            event_command_repo=event_command_repo,
            lifecycle_sweeper=lifecycle_sweeper,
        )

    @Logger.io
    async def update_booking(
        self, *, user_id: int, booking_id: int, changes: dict[str, Any]
    ) -> Booking:
        await self.lifecycle_sweeper.execute()

        booking = await self.booking_query_repo.get_by_id(booking_id)
        if not booking:
            raise NotFoundError(f'Booking not found with id of {booking_id}')
        booking.validate_owner(user_id)

        patch = {k: v for k, v in changes.items() if k not in IMMUTABLE_BOOKING_FIELDS}
        requested_status = patch.get('status')
        if requested_status is None or requested_status == booking.status:
            return booking

        if requested_status != BookingStatus.CANCELLED:
            raise DomainError('Unsupported status transition')

        return await self._cancel(booking)

    async def _cancel(self, booking: Booking) -> Booking:
        now = datetime.now(timezone.utc)
        booking.ensure_cancellable(now)

        cancelled = await self.booking_command_repo.transition_status(
            booking_id=booking.id,  # type: ignore[arg-type]
            to_status=BookingStatus.CANCELLED,
            from_status=booking.status,
        )
        if cancelled is None:
            return await self._resolve_lost_claim(booking, now)

        try:
            available = await self.event_command_repo.release_seats(
                booking.event_id, booking.seats_booked
            )
        except Exception:
            await self._restore_status(booking)
            raise

        if available is None:
            Logger.base.warning(
                f'🎫 [BOOKING] Event {booking.event_id} is gone, '
                f'{booking.booking_reference} cancelled without releasing seats'
            )
        else:
            Logger.base.info(
                f'🎫 [BOOKING] Cancelled {booking.booking_reference}, released '
                f'{booking.seats_booked} seats, {available} available'
            )
        return cancelled

    async def _resolve_lost_claim(self, booking: Booking, now: datetime) -> Booking:
        current = await self.booking_query_repo.get_by_id(booking.id)  # type: ignore[arg-type]
        if not current:
            raise NotFoundError(f'Booking not found with id of {booking.id}')
        if current.status == BookingStatus.CANCELLED:
            # Another request cancelled it first and released the seats
            return current
        current.ensure_cancellable(now)
        raise ConflictError('Booking was modified concurrently, please retry')

    async def _restore_status(self, booking: Booking) -> None:
        try:
            await self.booking_command_repo.transition_status(
                booking_id=booking.id,  # type: ignore[arg-type]
                to_status=booking.status,
                from_status=BookingStatus.CANCELLED,
            )
            Logger.base.warning(
                f'↩️ [COMPENSATE] Restored {booking.booking_reference} to {booking.status}'
            )
        except Exception as restore_error:
            Logger.base.opt(exception=restore_error).error(
                f'↩️ [COMPENSATE] Could not restore {booking.booking_reference} '
                f'to {booking.status}'
            )
