from abc import ABC, abstractmethod
from typing import Optional

from src.service.event_booking.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """User write operations"""

    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def update(self, user_entity: UserEntity) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        pass
