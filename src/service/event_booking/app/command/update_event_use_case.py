from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.create_event_use_case import (
    ensure_venue_and_category_exist,
)
from src.service.event_booking.app.interface.i_category_repo import ICategoryRepo
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.app.interface.i_venue_repo import IVenueRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus


class UpdateEventUseCase:
    """
    Admin edit of an event.

    `created_by`, `status` and `available_seats` are ignored here. A new
    `total_capacity` goes through `resize_capacity`, which shifts available
    seats by the same delta in one statement and refuses to drop below the
    seats already booked.
    """

    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        event_command_repo: IEventCommandRepo,
        venue_repo: IVenueRepo,
        category_repo: ICategoryRepo,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.event_command_repo = event_command_repo
        self.venue_repo = venue_repo
        self.category_repo = category_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        venue_repo: IVenueRepo = Depends(Provide[Container.venue_repo]),
        category_repo: ICategoryRepo = Depends(Provide[Container.category_repo]),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            event_command_repo=event_command_repo,
            venue_repo=venue_repo,
            category_repo=category_repo,
        )

    @Logger.io
    async def update(self, event_id: int, changes: dict[str, Any]) -> EventEntity:
        event = await self.event_query_repo.get_by_id(event_id)
        if not event:
            raise NotFoundError('Event not found')

        new_capacity = changes.get('total_capacity')
        field_changes = {k: v for k, v in changes.items() if k != 'total_capacity'}

        await ensure_venue_and_category_exist(
            self.venue_repo,
            self.category_repo,
            venue_id=field_changes.get('venue_id'),
            category_id=field_changes.get('category_id'),
        )
        # Validate the edit before touching the seat counters
        event.apply_changes(field_changes)

        if new_capacity is not None and new_capacity != event.total_capacity:
            if new_capacity < 0:
                raise DomainError('Total capacity must not be negative')
            resized = await self.event_command_repo.resize_capacity(event_id, new_capacity)
            if not resized:
                raise DomainError(
                    'Total capacity cannot be lower than the seats already booked',
                    details={'booked': event.total_capacity - (event.available_seats or 0)},
                )
            event = resized

        updated = await self.event_command_repo.update(event.apply_changes(field_changes))
        if not updated:
            raise NotFoundError('Event not found')
        return updated


class UpdateEventStatusUseCase:
    def __init__(self, event_command_repo: IEventCommandRepo) -> None:
        self.event_command_repo = event_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
    ) -> Self:
        return cls(event_command_repo)

    @Logger.io
    async def update_status(self, event_id: int, status: EventStatus) -> EventEntity:
        updated = await self.event_command_repo.update_status(event_id, status)
        if not updated:
            raise NotFoundError('Event not found')
        Logger.base.info(f'📅 [EVENT] Event {event_id} is now {status}')
        return updated
