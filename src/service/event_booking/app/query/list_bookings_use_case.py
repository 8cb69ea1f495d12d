from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus


class ListBookingsUseCase:
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
    async def list_all(
        self, *, status: Optional[BookingStatus] = None, on_date: Optional[date] = None
    ) -> List[Booking]:
        await self.lifecycle_sweeper.execute()
        return await self.booking_query_repo.list_bookings(status=status, on_date=on_date)

    @Logger.io
    async def list_for_user(self, user_id: int) -> List[Booking]:
        await self.lifecycle_sweeper.execute()
        return await self.booking_query_repo.list_by_user(user_id)

    @Logger.io
    async def list_for_event(self, event_id: int) -> List[Booking]:
        await self.lifecycle_sweeper.execute()
        return await self.booking_query_repo.list_by_event(event_id)
