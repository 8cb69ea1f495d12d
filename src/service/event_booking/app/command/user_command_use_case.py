"""User registration and profile use cases."""

import secrets
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.event_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.event_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    @Logger.io
    async def register(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: Optional[str] = None,
    ) -> UserEntity:
        return await self._register(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=UserRole.USER,
        )

    @Logger.io
    async def register_admin(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        admin_secret: str,
        phone: Optional[str] = None,
    ) -> UserEntity:
        expected = settings.ADMIN_SECRET.get_secret_value()
        if not secrets.compare_digest(admin_secret.encode(), expected.encode()):
            raise ForbiddenError('Invalid admin secret')

        return await self._register(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=UserRole.ADMIN,
        )

    async def _register(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: Optional[str],
        role: UserRole,
    ) -> UserEntity:
        if await self.user_query_repo.exists_by_email(email):
            raise ConflictError('User already exists')

        user = UserEntity(
            email=email, first_name=first_name, last_name=last_name, phone=phone, role=role
        )
        user.set_password(password, self.password_hasher)
        created = await self.user_command_repo.create(user)
        Logger.base.info(f'👤 [USER] Registered {created.email} as {created.role.value}')
        return created


class UpdateUserUseCase:
    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    @Logger.io
    async def update(
        self,
        user_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone: Optional[str] = None,
        password: Optional[str] = None,
    ) -> UserEntity:
        user = await self.user_query_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError('User not found')

        user = user.update_profile(first_name=first_name, last_name=last_name, phone=phone)
        if password:
            user.set_password(password, self.password_hasher)

        updated = await self.user_command_repo.update(user)
        if not updated:
            raise NotFoundError('User not found')
        return updated


class DeleteUserUseCase:
    def __init__(self, user_command_repo: IUserCommandRepo) -> None:
        self.user_command_repo = user_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
    ) -> Self:
        return cls(user_command_repo)

    @Logger.io
    async def delete(self, user_id: int) -> bool:
        if not await self.user_command_repo.delete(user_id):
            raise NotFoundError('User not found')
        return True
