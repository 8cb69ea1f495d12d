from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.event_booking.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    """User read operations"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def list_users(self) -> List[UserEntity]:
        pass

    @abstractmethod
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        """Return the user when the password matches, None otherwise"""
        pass
