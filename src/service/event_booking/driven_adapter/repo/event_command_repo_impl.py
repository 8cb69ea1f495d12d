from datetime import datetime
from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import case, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.repo.entity_mapper import (
    event_entity_to_columns,
    event_model_to_entity,
)


class EventCommandRepoImpl(IEventCommandRepo):
    """
    Event writes. Each method is one statement in its own session.

    The seat counter is guarded in SQL (`available_seats >= :n`, capped at
    `total_capacity`) so concurrent requests cannot oversell or overfill.
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, event: EventEntity) -> EventEntity:
        async with self.session_factory() as session:
            event_model = EventModel(
                **event_entity_to_columns(event),
                total_capacity=event.total_capacity,
                available_seats=event.available_seats,
                status=event.status.value,
                created_by=event.created_by,
            )
            session.add(event_model)
            await session.flush()
            created = await self._commit_and_fetch(session, event_model.id)
            assert created is not None
            return created

    @Logger.io
    async def update(self, event: EventEntity) -> Optional[EventEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event.id)
                .values(**event_entity_to_columns(event))
                .returning(EventModel.id)
                .execution_options(synchronize_session=False)
            )
            return await self._commit_and_fetch(session, result.scalar_one_or_none())

    @Logger.io
    async def update_status(self, event_id: int, status: EventStatus) -> Optional[EventEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event_id)
                .values(status=status.value)
                .returning(EventModel.id)
                .execution_options(synchronize_session=False)
            )
            return await self._commit_and_fetch(session, result.scalar_one_or_none())

    @Logger.io
    async def delete(self, event_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(EventModel)
                .where(EventModel.id == event_id)
                .returning(EventModel.id)
                .execution_options(synchronize_session=False)
            )
            deleted_id = result.scalar_one_or_none()
            await session.commit()
            return deleted_id is not None

    @Logger.io
    async def reserve_seats(self, event_id: int, seats: int) -> Optional[int]:
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event_id, EventModel.available_seats >= seats)
                .values(available_seats=EventModel.available_seats - seats)
                .returning(EventModel.available_seats)
                .execution_options(synchronize_session=False)
            )
            remaining = result.scalar_one_or_none()
            await session.commit()
            return remaining

    @Logger.io
    async def release_seats(self, event_id: int, seats: int) -> Optional[int]:
        restored = EventModel.available_seats + seats
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event_id)
                .values(
                    available_seats=case(
                        (restored > EventModel.total_capacity, EventModel.total_capacity),
                        else_=restored,
                    )
                )
                .returning(EventModel.available_seats)
                .execution_options(synchronize_session=False)
            )
            available = result.scalar_one_or_none()
            await session.commit()
            return available

    @Logger.io
    async def resize_capacity(self, event_id: int, total_capacity: int) -> Optional[EventEntity]:
        # SET expressions read the pre-update row, so the delta is computed atomically
        delta = total_capacity - EventModel.total_capacity
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event_id, EventModel.available_seats + delta >= 0)
                .values(
                    total_capacity=total_capacity,
                    available_seats=EventModel.available_seats + delta,
                )
                .returning(EventModel.id)
                .execution_options(synchronize_session=False)
            )
            return await self._commit_and_fetch(session, result.scalar_one_or_none())

    @Logger.io
    async def complete_ended_events(self, now: datetime) -> List[int]:
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(
                    EventModel.status == EventStatus.PUBLISHED.value,
                    EventModel.end_date_time < now,
                )
                .values(status=EventStatus.COMPLETED.value)
                .returning(EventModel.id)
                .execution_options(synchronize_session=False)
            )
            event_ids = list(result.scalars().all())
            await session.commit()
            return event_ids

    @staticmethod
    async def _commit_and_fetch(
        session: AsyncSession, event_id: Optional[int]
    ) -> Optional[EventEntity]:
        await session.commit()
        if event_id is None:
            return None
        event_model = await session.get(EventModel, event_id, populate_existing=True)
        return event_model_to_entity(event_model) if event_model else None
