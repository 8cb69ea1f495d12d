from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.event_booking.domain.entity.category_entity import Category


class ICategoryRepo(ABC):
    @abstractmethod
    async def create(self, category: Category) -> Category:
        pass

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Optional[Category]:
        pass

    @abstractmethod
    async def list_categories(self) -> List[Category]:
        pass

    @abstractmethod
    async def update(self, category: Category) -> Optional[Category]:
        pass

    @abstractmethod
    async def delete(self, category_id: int) -> bool:
        pass
