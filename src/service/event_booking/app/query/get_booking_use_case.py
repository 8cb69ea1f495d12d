from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.domain.entity.booking_entity import Booking
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.domain.value_object.booking_reference import (
    normalize_booking_reference,
)


class GetBookingUseCase:
    """Single booking lookups, visible to the owner and to admins."""

    def __init__(
        self, booking_query_repo: IBookingQueryRepo, lifecycle_sweeper: SweepLifecycleUseCase
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.lifecycle_sweeper = lifecycle_sweeper

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        lifecycle_sweeper: SweepLifecycleUseCase = Depends(Provide[Container.lifecycle_sweeper]),
    ) -> Self:
        return cls(booking_query_repo, lifecycle_sweeper)

    @Logger.io
    async def get_booking(self, *, booking_id: int, requester: UserEntity) -> Booking:
        await self.lifecycle_sweeper.execute()
        booking = await self.booking_query_repo.get_by_id(booking_id)
        if not booking:
            raise NotFoundError(f'Booking not found with id of {booking_id}')
        return self._visible_to(booking, requester)

    @Logger.io
    async def get_by_reference(self, *, booking_reference: str, requester: UserEntity) -> Booking:
        await self.lifecycle_sweeper.execute()
        reference = normalize_booking_reference(booking_reference)
        booking = await self.booking_query_repo.get_by_reference(reference)
        if not booking:
            raise NotFoundError(f'Booking not found with reference {reference}')
        return self._visible_to(booking, requester)

    @staticmethod
    def _visible_to(booking: Booking, requester: UserEntity) -> Booking:
        if booking.user_id != requester.id and not requester.is_admin:
            raise ForbiddenError('Not authorized to access this booking')
        return booking
