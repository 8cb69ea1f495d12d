from datetime import datetime
from typing import AsyncContextManager, Callable, Optional

import attrs
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.driven_adapter.model.booking_model import BookingModel
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.repo.entity_mapper import booking_model_to_entity


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, booking: Booking) -> Booking:
        async with self.session_factory() as session:
            booking_model = BookingModel(
                booking_reference=booking.booking_reference,
                user_id=booking.user_id,
                event_id=booking.event_id,
                ticket_type=booking.ticket_type,
                seats_booked=booking.seats_booked,
                total_amount=booking.total_amount,
                status=booking.status.value,
                booking_date=booking.booking_date,
                cancellation_allowed=booking.cancellation_allowed,
                cancellation_deadline=booking.cancellation_deadline,
            )
            session.add(booking_model)
            await session.commit()
            return await self._fetch(session, booking_model.id)  # type: ignore[return-value]

    @Logger.io
    async def transition_status(
        self,
        *,
        booking_id: int,
        to_status: BookingStatus,
        from_status: Optional[BookingStatus] = None,
    ) -> Optional[Booking]:
        query = update(BookingModel).where(BookingModel.id == booking_id)
        if from_status is not None:
            query = query.where(BookingModel.status == from_status.value)

        async with self.session_factory() as session:
            result = await session.execute(
                query.values(status=to_status.value)
                .returning(BookingModel.id)
                .execution_options(synchronize_session=False)
            )
            updated_id = result.scalar_one_or_none()
            await session.commit()
            if updated_id is None:
                return None
            return await self._fetch(session, updated_id)

    @Logger.io
    async def delete(self, booking_id: int) -> Optional[Booking]:
        async with self.session_factory() as session:
            booking = await self._fetch(session, booking_id)
            if booking is None:
                return None

            # The status that counts is the one the row had at the moment it was removed
            result = await session.execute(
                delete(BookingModel)
                .where(BookingModel.id == booking_id)
                .returning(BookingModel.status)
                .execution_options(synchronize_session=False)
            )
            removed_status = result.scalar_one_or_none()
            await session.commit()
            if removed_status is None:
                return None
            return attrs.evolve(booking, status=removed_status)

    @Logger.io
    async def complete_bookings_for_ended_events(self, now: datetime) -> int:
        # Cancelled events keep their bookings as they are
        ended_events = select(EventModel.id).where(
            EventModel.status == EventStatus.COMPLETED.value,
            EventModel.end_date_time < now,
        )
        async with self.session_factory() as session:
            result = await session.execute(
                update(BookingModel)
                .where(
                    BookingModel.status == BookingStatus.CONFIRMED.value,
                    BookingModel.event_id.in_(ended_events),
                )
                .values(status=BookingStatus.COMPLETED.value)
                .returning(BookingModel.id)
                .execution_options(synchronize_session=False)
            )
            completed = len(result.scalars().all())
            await session.commit()
            return completed

    @staticmethod
    async def _fetch(session: AsyncSession, booking_id: int) -> Optional[Booking]:
        result = await session.execute(
            select(BookingModel)
            .where(BookingModel.id == booking_id)
            .execution_options(populate_existing=True)
        )
        booking_model = result.scalar_one_or_none()
        return booking_model_to_entity(booking_model) if booking_model else None
