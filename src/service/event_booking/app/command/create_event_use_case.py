from datetime import datetime
from typing import Any, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_category_repo import ICategoryRepo
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_booking.app.interface.i_venue_repo import IVenueRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.domain.enum.event_type import EventType


async def ensure_venue_and_category_exist(
    venue_repo: IVenueRepo,
    category_repo: ICategoryRepo,
    *,
    venue_id: Optional[int] = None,
    category_id: Optional[int] = None,
) -> None:
    if venue_id is not None and not await venue_repo.get_by_id(venue_id):
        raise NotFoundError('Venue not found')
    if category_id is not None and not await category_repo.get_by_id(category_id):
        raise NotFoundError('Category not found')


class CreateEventUseCase:
    def __init__(
        self,
        *,
        event_command_repo: IEventCommandRepo,
        venue_repo: IVenueRepo,
        category_repo: ICategoryRepo,
    ) -> None:
        self.event_command_repo = event_command_repo
        self.venue_repo = venue_repo
        self.category_repo = category_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        venue_repo: IVenueRepo = Depends(Provide[Container.venue_repo]),
        category_repo: ICategoryRepo = Depends(Provide[Container.category_repo]),
    ) -> Self:
        return cls(
            event_command_repo=event_command_repo,
            venue_repo=venue_repo,
            category_repo=category_repo,
        )

    @Logger.io
    async def create(
        self,
        *,
        created_by: int,
        title: str,
        description: str,
        start_date_time: datetime,
        end_date_time: datetime,
        venue_id: int,
        category_id: int,
        total_capacity: int,
        price: float,
        event_type: EventType = EventType.IN_PERSON,
        status: EventStatus = EventStatus.DRAFT,
        is_featured: bool = False,
        images: Optional[list[str]] = None,
        ticket_tiers: Optional[list[dict[str, Any]]] = None,
    ) -> EventEntity:
        await ensure_venue_and_category_exist(
            self.venue_repo, self.category_repo, venue_id=venue_id, category_id=category_id
        )

        event = EventEntity.create(
            title=title,
            description=description,
            start_date_time=start_date_time,
            end_date_time=end_date_time,
            venue_id=venue_id,
            category_id=category_id,
            total_capacity=total_capacity,
            price=price,
            created_by=created_by,
            event_type=event_type,
            status=status,
            is_featured=is_featured,
            images=images,
            ticket_tiers=ticket_tiers,
        )
        created = await self.event_command_repo.create(event)
        Logger.base.info(
            f'📅 [EVENT] Created "{created.title}" (id={created.id}, '
            f'capacity={created.total_capacity}, status={created.status})'
        )
        return created
