from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.domain.entity.event_entity import EventEntity


class GetEventUseCase:
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
    async def get_by_id(self, event_id: int) -> EventEntity:
        await self.lifecycle_sweeper.execute()

        event = await self.event_query_repo.get_by_id(event_id)
        if not event:
            raise NotFoundError('Event not found')
        return event
