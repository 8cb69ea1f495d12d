from datetime import date, datetime, time, timedelta, timezone
from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.domain.enum.ticket_type import TicketType
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.repo.entity_mapper import event_model_to_entity


def day_bounds(on_date: date) -> tuple[datetime, datetime]:
    start = datetime.combine(on_date, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, event_id: int) -> Optional[EventEntity]:
        async with self.session_factory() as session:
            event_model = await session.get(EventModel, event_id)
            return event_model_to_entity(event_model) if event_model else None

    @Logger.io
    async def list_events(
        self,
        *,
        venue_id: Optional[int] = None,
        category_id: Optional[int] = None,
        is_featured: Optional[bool] = None,
        ticket_type: Optional[str] = None,
        status: Optional[EventStatus] = None,
    ) -> List[EventEntity]:
        query = select(EventModel).order_by(EventModel.start_date_time)
        if venue_id is not None:
            query = query.where(EventModel.venue_id == venue_id)
        if category_id is not None:
            query = query.where(EventModel.category_id == category_id)
        if is_featured is not None:
            query = query.where(EventModel.is_featured == is_featured)
        if status is not None:
            query = query.where(EventModel.status == status.value)

        async with self.session_factory() as session:
            result = await session.execute(query)
            events = [event_model_to_entity(m) for m in result.scalars().all()]

        # Tiers live in a JSON column, filtering on them is done here to stay dialect neutral
        if ticket_type is not None:
            events = [e for e in events if self._offers_ticket_type(e, ticket_type)]
        return events

    @Logger.io
    async def list_by_venue(
        self, venue_id: int, on_date: Optional[date] = None
    ) -> List[EventEntity]:
        query = (
            select(EventModel)
            .where(EventModel.venue_id == venue_id)
            .order_by(EventModel.start_date_time)
        )
        if on_date is not None:
            start, end = day_bounds(on_date)
            query = query.where(
                EventModel.start_date_time >= start, EventModel.start_date_time < end
            )

        async with self.session_factory() as session:
            result = await session.execute(query)
            return [event_model_to_entity(m) for m in result.scalars().all()]

    @staticmethod
    def _offers_ticket_type(event: EventEntity, ticket_type: str) -> bool:
        if not event.ticket_tiers:
            return ticket_type == TicketType.GENERAL
        return any(tier.type == ticket_type for tier in event.ticket_tiers)
