from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, SecretStr

from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: SecretStr = Field(min_length=8)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)

    class Config:
        json_schema_extra = {
            'example': {
                'email': 'jane@example.com',
                'password': 'P@ssw0rd!',
                'first_name': 'Jane',
                'last_name': 'Doe',
                'phone': '+1-555-0100',
            }
        }


class CreateAdminRequest(CreateUserRequest):
    admin_secret: SecretStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: SecretStr


class UpdateUserRequest(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    password: Optional[SecretStr] = Field(default=None, min_length=8)


class UserResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(
            id=user.id or 0,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
        )


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserResponse
