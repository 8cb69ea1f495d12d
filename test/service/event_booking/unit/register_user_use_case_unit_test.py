from unittest.mock import AsyncMock, Mock

import pytest

from src.platform.exception.exceptions import ConflictError, DomainError, ForbiddenError
from src.service.event_booking.app.command.user_command_use_case import RegisterUserUseCase
from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.event_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from test.util_constant import TEST_ADMIN_SECRET


@pytest.mark.unit
class TestRegisterUser:
    @pytest.fixture
    def user_command_repo(self) -> Mock:
        repo = AsyncMock()

        async def _create(user: UserEntity) -> UserEntity:
            user.id = 1
            return user

        repo.create = AsyncMock(side_effect=_create)
        return repo

    @pytest.fixture
    def user_query_repo(self) -> Mock:
        repo = AsyncMock()
        repo.exists_by_email = AsyncMock(return_value=False)
        return repo

    @pytest.fixture
    def use_case(self, user_command_repo, user_query_repo) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=BcryptPasswordHasher(rounds=4),
        )

    @pytest.mark.asyncio
    async def test_register_hashes_password_and_lowercases_email(self, use_case) -> None:
        user = await use_case.register(
            email='Jane@Example.com', password='P@ssw0rd', first_name='Jane', last_name='Doe'
        )

        assert user.email == 'jane@example.com'
        assert user.role == UserRole.USER
        assert user.hashed_password.startswith('$2')
        assert user.hashed_password != 'P@ssw0rd'

    @pytest.mark.asyncio
    async def test_register_admin_with_secret(self, use_case) -> None:
        user = await use_case.register_admin(
            email='boss@example.com',
            password='P@ssw0rd',
            first_name='Big',
            last_name='Boss',
            admin_secret=TEST_ADMIN_SECRET,
        )

        assert user.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_fail_register_admin_with_wrong_secret(
        self, use_case, user_command_repo
    ) -> None:
        with pytest.raises(ForbiddenError, match='Invalid admin secret'):
            await use_case.register_admin(
                email='boss@example.com',
                password='P@ssw0rd',
                first_name='Big',
                last_name='Boss',
                admin_secret='guess',
            )

        user_command_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_fail_when_email_taken(self, use_case, user_query_repo) -> None:
        user_query_repo.exists_by_email = AsyncMock(return_value=True)

        with pytest.raises(ConflictError, match='User already exists'):
            await use_case.register(
                email='jane@example.com', password='P@ssw0rd', first_name='J', last_name='D'
            )

    @pytest.mark.asyncio
    async def test_fail_when_password_too_short(self, use_case) -> None:
        with pytest.raises(DomainError):
            await use_case.register(
                email='jane@example.com', password='short', first_name='J', last_name='D'
            )
