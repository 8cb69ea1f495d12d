"""
Booking Command Repository Interface

Every write is a single conditional statement so that concurrent cancels and
deletes on the same booking resolve to exactly one winner.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, booking: Booking) -> Booking:
        """
        Insert a booking

        Raises:
            IntegrityError: When the booking reference already exists
        """
        pass

    @abstractmethod
    async def transition_status(
        self,
        *,
        booking_id: int,
        to_status: BookingStatus,
        from_status: Optional[BookingStatus] = None,
    ) -> Optional[Booking]:
        """
        Conditionally move a booking to `to_status`

        Args:
            booking_id: Booking to update
            to_status: Target status
            from_status: Only update when the current status equals this

        Returns:
            The updated booking, or None when no row matched the guard
        """
        pass

    @abstractmethod
    async def delete(self, booking_id: int) -> Optional[Booking]:
        """Remove a booking and return it as it was, None if already gone"""
        pass

    @abstractmethod
    async def complete_bookings_for_ended_events(self, now: datetime) -> int:
        """Mark confirmed bookings of completed events that ended before `now` as completed"""
        pass
