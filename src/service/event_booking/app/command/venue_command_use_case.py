"""Venue use cases (admin only)."""

from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.app.interface.i_venue_repo import IVenueRepo
from src.service.event_booking.domain.entity.venue_entity import Venue


class CreateVenueUseCase:
    def __init__(self, venue_repo: IVenueRepo) -> None:
        self.venue_repo = venue_repo

    @classmethod
    @inject
    def depends(cls, venue_repo: IVenueRepo = Depends(Provide[Container.venue_repo])) -> Self:
        return cls(venue_repo)

    @Logger.io
    async def create(self, **venue_data: Any) -> Venue:
        return await self.venue_repo.create(Venue(**venue_data))


class UpdateVenueUseCase:
    def __init__(self, venue_repo: IVenueRepo) -> None:
        self.venue_repo = venue_repo

    @classmethod
    @inject
    def depends(cls, venue_repo: IVenueRepo = Depends(Provide[Container.venue_repo])) -> Self:
        return cls(venue_repo)

    @Logger.io
    async def update(self, venue_id: int, changes: dict[str, Any]) -> Venue:
        venue = await self.venue_repo.get_by_id(venue_id)
        if not venue:
            raise NotFoundError('Venue not found')

        updated = await self.venue_repo.update(venue.apply_changes(changes))
        if not updated:
            raise NotFoundError('Venue not found')
        return updated


class DeleteVenueUseCase:
    def __init__(self, venue_repo: IVenueRepo, event_query_repo: IEventQueryRepo) -> None:
        self.venue_repo = venue_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        venue_repo: IVenueRepo = Depends(Provide[Container.venue_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(venue_repo, event_query_repo)

    @Logger.io
    async def delete(self, venue_id: int) -> bool:
        if await self.event_query_repo.list_by_venue(venue_id):
            raise ConflictError('Venue still hosts events and cannot be deleted')
        if not await self.venue_repo.delete(venue_id):
            raise NotFoundError('Venue not found')
        return True
