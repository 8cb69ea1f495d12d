from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.event_booking.domain.entity.venue_entity import Venue


class IVenueRepo(ABC):
    @abstractmethod
    async def create(self, venue: Venue) -> Venue:
        pass

    @abstractmethod
    async def get_by_id(self, venue_id: int) -> Optional[Venue]:
        pass

    @abstractmethod
    async def list_venues(self) -> List[Venue]:
        pass

    @abstractmethod
    async def update(self, venue: Venue) -> Optional[Venue]:
        pass

    @abstractmethod
    async def delete(self, venue_id: int) -> bool:
        pass
