from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import AuthenticationError, DomainError, ForbiddenError

if TYPE_CHECKING:
    from src.service.event_booking.app.interface.i_password_hasher import IPasswordHasher


class UserRole(str, Enum):
    USER = 'user'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    email: str = attrs.field(default='', converter=lambda v: (v or '').strip().lower())
    first_name: str = ''
    last_name: str = ''
    phone: Optional[str] = None
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    def validate_exists(self) -> None:
        if not self.id or not self.email:
            raise AuthenticationError('User not found')

    @staticmethod
    def validate_role(role: str) -> None:
        """Validate if the role is valid"""
        valid_roles = [r.value for r in UserRole]
        if role not in valid_roles:
            raise DomainError(f'Invalid role: {role}. Must be one of: {", ".join(valid_roles)}')

    def set_password(self, plain_password: str, password_hasher: 'IPasswordHasher') -> None:
        if len(plain_password) < 8:
            raise DomainError('Password must be at least 8 characters')
        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )

    def update_profile(
        self,
        *,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> 'UserEntity':
        return attrs.evolve(
            self,
            first_name=first_name if first_name is not None else self.first_name,
            last_name=last_name if last_name is not None else self.last_name,
            phone=phone if phone is not None else self.phone,
        )


@attrs.define(frozen=True)
class UserSummary:
    """Public contact details of a user, without credentials or role."""

    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
