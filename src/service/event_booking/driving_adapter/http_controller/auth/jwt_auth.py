"""
JWT issuing and verification

Tokens are self-contained: the current user is rebuilt from the payload
without a database round trip.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.event_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole

_REQUIRED_CLAIMS = ('user_id', 'email', 'role', 'is_active')


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    @property
    def max_age_seconds(self) -> int:
        return int(self.token_expire.total_seconds())

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + self.token_expire,
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'first_name': user_entity.first_name,
            'last_name': user_entity.last_name,
            'role': user_entity.role.value,
            'is_active': user_entity.is_active,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError('Token has expired')
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    async def authenticate_user(
        self, user_query_repo: IUserQueryRepo, email: str, password: str
    ) -> UserEntity:
        user_entity = await user_query_repo.verify_password(email=email, plain_password=password)
        if not user_entity:
            raise AuthenticationError('Incorrect credentials')
        user_entity.validate_active()

        return user_entity

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)
        if any(payload.get(claim) is None for claim in _REQUIRED_CLAIMS):
            raise AuthenticationError('Invalid token')

        try:
            role = UserRole(payload['role'])
        except ValueError:
            raise AuthenticationError('Invalid token')

        # Rebuild UserEntity from JWT payload (no DB query)
        user_entity = UserEntity(
            id=payload['user_id'],
            email=payload['email'],
            first_name=payload.get('first_name', ''),
            last_name=payload.get('last_name', ''),
            role=role,
            is_active=payload['is_active'],
        )
        user_entity.validate_active()

        return user_entity
