from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.driven_adapter.model.user_model import UserModel
from src.service.event_booking.driven_adapter.repo.entity_mapper import user_model_to_entity


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                first_name=user_entity.first_name,
                last_name=user_entity.last_name,
                phone=user_entity.phone,
                role=user_entity.role.value,
                is_active=user_entity.is_active,
            )

            session.add(user_model)
            await session.commit()
            await session.refresh(user_model)

            return user_model_to_entity(user_model)

    @Logger.io
    async def update(self, user_entity: UserEntity) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_entity.id))
            user_model = result.scalar_one_or_none()
            if not user_model:
                return None

            user_model.first_name = user_entity.first_name
            user_model.last_name = user_entity.last_name
            user_model.phone = user_entity.phone
            if user_entity.hashed_password:
                user_model.hashed_password = user_entity.hashed_password

            await session.commit()
            await session.refresh(user_model)
            return user_model_to_entity(user_model)

    @Logger.io
    async def delete(self, user_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(UserModel).where(UserModel.id == user_id).returning(UserModel.id)
            )
            deleted_id = result.scalar_one_or_none()
            await session.commit()
            return deleted_id is not None
