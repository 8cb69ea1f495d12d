from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, booking_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_by_reference(self, booking_reference: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_bookings(
        self, *, status: Optional[BookingStatus] = None, on_date: Optional[date] = None
    ) -> List[Booking]:
        """All bookings, optionally filtered by status and booking date (UTC)"""
        pass

    @abstractmethod
    async def list_by_user(self, user_id: int) -> List[Booking]:
        pass

    @abstractmethod
    async def list_by_event(self, event_id: int) -> List[Booking]:
        pass
