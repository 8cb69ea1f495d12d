from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo


class DeleteEventUseCase:
    """Bookings of a deleted event are kept as they are."""

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
    async def delete(self, event_id: int) -> bool:
        if not await self.event_command_repo.delete(event_id):
            raise NotFoundError('Event not found')
        return True
