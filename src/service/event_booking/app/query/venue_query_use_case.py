from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.app.interface.i_venue_repo import IVenueRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.entity.venue_entity import Venue


class GetVenueUseCase:
    def __init__(
        self,
        *,
        venue_repo: IVenueRepo,
        event_query_repo: IEventQueryRepo,
        lifecycle_sweeper: SweepLifecycleUseCase,
    ) -> None:
        self.venue_repo = venue_repo
        self.event_query_repo = event_query_repo
        self.lifecycle_sweeper = lifecycle_sweeper

    @classmethod
    @inject
    def depends(
        cls,
        venue_repo: IVenueRepo = Depends(Provide[Container.venue_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        lifecycle_sweeper: SweepLifecycleUseCase = Depends(Provide[Container.lifecycle_sweeper]),
    ) -> Self:
        return cls(
            venue_repo=venue_repo,
            event_query_repo=event_query_repo,
            lifecycle_sweeper=lifecycle_sweeper,
        )

    @Logger.io
    async def get_with_events(
        self, venue_id: int, on_date: Optional[date] = None
    ) -> tuple[Venue, List[EventEntity]]:
        venue = await self.venue_repo.get_by_id(venue_id)
        if not venue:
            raise NotFoundError('Venue not found')

        await self.lifecycle_sweeper.execute()
        events = await self.event_query_repo.list_by_venue(venue_id, on_date)
        return venue, events


class ListVenuesUseCase:
    def __init__(self, venue_repo: IVenueRepo) -> None:
        self.venue_repo = venue_repo

    @classmethod
    @inject
    def depends(cls, venue_repo: IVenueRepo = Depends(Provide[Container.venue_repo])) -> Self:
        return cls(venue_repo)

    @Logger.io
    async def list_venues(self) -> List[Venue]:
        return await self.venue_repo.list_venues()
