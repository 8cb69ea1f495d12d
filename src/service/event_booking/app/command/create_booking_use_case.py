from datetime import datetime, timezone
from typing import NoReturn, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.domain.entity.booking_entity import Booking


class CreateBookingUseCase:
    """
    Reserve seats on a published event and record the booking.

    Flow:
    1. Sweep lifecycle so an ended event is never booked
    2. Load the event, check it is published
    3. Resolve the ticket tier, price and cancellation deadline (no writes yet)
    4. Conditionally decrement available seats in one statement
    5. Insert the booking; if that fails, give the seats back and re-raise

    There is no transaction across the event and booking tables, step 5's
    release is the only thing that keeps the inventory consistent on failure.
    """

    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        event_command_repo: IEventCommandRepo,
        booking_command_repo: IBookingCommandRepo,
        lifecycle_sweeper: SweepLifecycleUseCase,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.event_command_repo = event_command_repo
        self.booking_command_repo = booking_command_repo
        self.lifecycle_sweeper = lifecycle_sweeper
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        lifecycle_sweeper: SweepLifecycleUseCase = Depends(Provide[Container.lifecycle_sweeper]),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            event_command_repo=event_command_repo,
            booking_command_repo=booking_command_repo,
            lifecycle_sweeper=lifecycle_sweeper,
        )

    @Logger.io
    async def create_booking(
        self,
        *,
        user_id: int,
        event_id: int,
        seats_booked: int,
        ticket_type: str,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'event.id': event_id, 'user.id': user_id, 'seats': seats_booked},
        ):
            await self.lifecycle_sweeper.execute()

            event = await self.event_query_repo.get_by_id(event_id)
            if not event:
                raise NotFoundError(f'Event not found with id of {event_id}')
            if not event.is_bookable:
                raise DomainError('Event is not available for booking')

            # Prices the booking and rejects unknown tiers before any seat is touched
            booking = Booking.create(
                user_id=user_id,
                event=event,
                ticket_type=ticket_type,
                seats_booked=seats_booked,
                now=datetime.now(timezone.utc),
            )

            remaining = await self.event_command_repo.reserve_seats(event_id, seats_booked)
            if remaining is None:
                await self._raise_not_enough_seats(event_id)

            Logger.base.info(
                f'🎫 [BOOKING] Reserved {seats_booked} seats on event {event_id}, '
                f'{remaining} left'
            )

            try:
                created = await self.booking_command_repo.create(booking)
            except Exception:
                await self._release_reserved_seats(event_id, seats_booked)
                raise

            Logger.base.info(
                f'🎫 [BOOKING] Created {created.booking_reference} for user {user_id}'
            )
            return created

    async def _raise_not_enough_seats(self, event_id: int) -> NoReturn:
        current = await self.event_query_repo.get_by_id(event_id)
        if not current:
            raise NotFoundError(f'Event not found with id of {event_id}')
        raise DomainError(
            'Not enough seats available', details={'available': current.available_seats}
        )

    async def _release_reserved_seats(self, event_id: int, seats: int) -> None:
        try:
            await self.event_command_repo.release_seats(event_id, seats)
            Logger.base.warning(
                f'↩️ [COMPENSATE] Released {seats} seats on event {event_id} after failed booking'
            )
        except Exception as release_error:
            # The original failure is what the caller sees
            Logger.base.opt(exception=release_error).error(
                f'↩️ [COMPENSATE] Could not release {seats} seats on event {event_id}'
            )
