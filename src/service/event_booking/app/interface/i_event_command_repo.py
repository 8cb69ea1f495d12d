"""
Event Command Repository Interface

Owns the event inventory. Seat counters change only through the guarded,
single-statement operations below; there is no setter for available seats.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus


class IEventCommandRepo(ABC):
    @abstractmethod
    async def create(self, event: EventEntity) -> EventEntity:
        pass

    @abstractmethod
    async def update(self, event: EventEntity) -> Optional[EventEntity]:
        """Persist descriptive fields; status and seat counters are left alone"""
        pass

    @abstractmethod
    async def update_status(self, event_id: int, status: EventStatus) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def delete(self, event_id: int) -> bool:
        pass

    @abstractmethod
    async def reserve_seats(self, event_id: int, seats: int) -> Optional[int]:
        """
        Conditionally decrement available seats

        Args:
            event_id: Event to reserve against
            seats: Number of seats, at least 1

        Returns:
            The new available count, or None when the event is missing or has
            fewer than `seats` left. Nothing is changed in that case.
        """
        pass

    @abstractmethod
    async def release_seats(self, event_id: int, seats: int) -> Optional[int]:
        """
        Return seats to the event, never beyond its total capacity

        Returns:
            The new available count, or None if the event no longer exists
        """
        pass

    @abstractmethod
    async def resize_capacity(self, event_id: int, total_capacity: int) -> Optional[EventEntity]:
        """
        Change total capacity and shift available seats by the same delta

        Returns None when the event is missing or when the shrink would push
        available seats below zero (more seats are already booked).
        """
        pass

    @abstractmethod
    async def complete_ended_events(self, now: datetime) -> List[int]:
        """Mark published events that ended before `now` as completed, return their ids"""
        pass
