from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo


class DeleteBookingUseCase:
    """
    Remove a booking and return its seats unless it was already cancelled.

    The row is deleted first; only the request whose DELETE actually removed
    it releases seats, so a repeated or concurrent delete cannot release twice.
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
    async def delete_booking(self, *, user_id: int, booking_id: int) -> bool:
        await self.lifecycle_sweeper.execute()

        booking = await self.booking_query_repo.get_by_id(booking_id)
        if not booking:
            raise NotFoundError(f'Booking not found with id of {booking_id}')
        booking.validate_owner(user_id)

        removed = await self.booking_command_repo.delete(booking_id)
        if not removed:
            raise NotFoundError(f'Booking not found with id of {booking_id}')

        if removed.holds_seats:
            available = await self.event_command_repo.release_seats(
                removed.event_id, removed.seats_booked
            )
            Logger.base.info(
                f'🎫 [BOOKING] Deleted {removed.booking_reference}, released '
                f'{removed.seats_booked} seats, {available} available'
            )
        else:
            Logger.base.info(f'🎫 [BOOKING] Deleted cancelled booking {removed.booking_reference}')

        return True
