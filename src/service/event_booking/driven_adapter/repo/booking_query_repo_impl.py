from datetime import date
from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.driven_adapter.model.booking_model import BookingModel
from src.service.event_booking.driven_adapter.repo.entity_mapper import booking_model_to_entity
from src.service.event_booking.driven_adapter.repo.event_query_repo_impl import day_bounds


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    async def _first(self, query: Select) -> Optional[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(query)
            booking_model = result.scalar_one_or_none()
            return booking_model_to_entity(booking_model) if booking_model else None

    async def _all(self, query: Select) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(query.order_by(BookingModel.id.desc()))
            return [booking_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def get_by_id(self, booking_id: int) -> Optional[Booking]:
        return await self._first(select(BookingModel).where(BookingModel.id == booking_id))

    @Logger.io
    async def get_by_reference(self, booking_reference: str) -> Optional[Booking]:
        return await self._first(
            select(BookingModel).where(BookingModel.booking_reference == booking_reference)
        )

    @Logger.io
    async def list_bookings(
        self, *, status: Optional[BookingStatus] = None, on_date: Optional[date] = None
    ) -> List[Booking]:
        query = select(BookingModel)
        if status is not None:
            query = query.where(BookingModel.status == status.value)
        if on_date is not None:
            start, end = day_bounds(on_date)
            query = query.where(BookingModel.booking_date >= start, BookingModel.booking_date < end)
        return await self._all(query)

    @Logger.io
    async def list_by_user(self, user_id: int) -> List[Booking]:
        return await self._all(select(BookingModel).where(BookingModel.user_id == user_id))

    @Logger.io
    async def list_by_event(self, event_id: int) -> List[Booking]:
        return await self._all(select(BookingModel).where(BookingModel.event_id == event_id))
