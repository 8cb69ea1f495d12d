from typing import AsyncContextManager, Callable, List, Optional

from pydantic import SecretStr
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.event_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.driven_adapter.model.user_model import UserModel
from src.service.event_booking.driven_adapter.repo.entity_mapper import user_model_to_entity


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        password_hasher: IPasswordHasher,
    ) -> None:
        self.session_factory = session_factory
        self.password_hasher = password_hasher

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.email == email.strip().lower())
            )
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return user_model_to_entity(user_model)

    @Logger.io
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_id))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return user_model_to_entity(user_model)

    @Logger.io
    async def exists_by_email(self, email: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(UserModel.id).where(UserModel.email == email.strip().lower())
            )
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def list_users(self) -> List[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).order_by(UserModel.id))
            return [user_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        user = await self.get_by_email(email)
        if not user:
            return None

        if not self.password_hasher.verify_password(
            plain_password=SecretStr(plain_password), hashed_password=user.hashed_password
        ):
            return None

        return user
