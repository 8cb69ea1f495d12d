from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def list_events(
        self,
        *,
        venue_id: Optional[int] = None,
        category_id: Optional[int] = None,
        is_featured: Optional[bool] = None,
        ticket_type: Optional[str] = None,
        status: Optional[EventStatus] = None,
    ) -> List[EventEntity]:
        pass

    @abstractmethod
    async def list_by_venue(
        self, venue_id: int, on_date: Optional[date] = None
    ) -> List[EventEntity]:
        """Events at a venue, optionally only those starting on `on_date` (UTC)"""
        pass
