from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus


class ListEventsUseCase:
    def __init__(
        self, event_query_repo: IEventQueryRepo, lifecycle_sweeper: SweepLifecycleUseCase
    ) -> None:
        self.event_query_repo = event_query_repo
        self.lifecycle_sweeper = lifecycle_sweeper

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        lifecycle_sweeper: SweepLifecycleUseCase = Depends(Provide[Container.lifecycle_sweeper]),
    ) -> Self:
        return cls(event_query_repo, lifecycle_sweeper)

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
        await self.lifecycle_sweeper.execute()
        return await self.event_query_repo.list_events(
            venue_id=venue_id,
            category_id=category_id,
            is_featured=is_featured,
            ticket_type=ticket_type,
            status=status,
        )

    @Logger.io
    async def list_featured(self) -> List[EventEntity]:
        return await self.list_events(is_featured=True)
