from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.user_command_use_case import (
    DeleteUserUseCase,
    RegisterUserUseCase,
    UpdateUserUseCase,
)
from src.service.event_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_booking.app.query.user_query_use_case import UserQueryUseCase
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.event_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.event_booking.driving_adapter.http_controller.schema.common_schema import (
    DeleteResponse,
)
from src.service.event_booking.driving_adapter.http_controller.schema.user_schema import (
    CreateAdminRequest,
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    UpdateUserRequest,
    UserResponse,
)


# === API Router ===

router = APIRouter()


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_user(
    request: CreateUserRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.register(
        email=request.email,
        password=request.password.get_secret_value(),
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
    )
    return UserResponse.from_entity(user_entity)


@router.post('/admin', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_admin(
    request: CreateAdminRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.register_admin(
        email=request.email,
        password=request.password.get_secret_value(),
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
        admin_secret=request.admin_secret.get_secret_value(),
    )
    return UserResponse.from_entity(user_entity)


@router.post('/login', response_model=LoginResponse)
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> LoginResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        email=request.email,
        password=request.password.get_secret_value(),
    )

    token = jwt_auth.create_jwt_token(user_entity)

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=jwt_auth.max_age_seconds,
        httponly=True,
        samesite='lax',
        secure=not settings.DEBUG,
    )

    return LoginResponse(access_token=token, user=UserResponse.from_entity(user_entity))


@router.get('/me', response_model=UserResponse)
@Logger.io
async def get_me(
    current_user: UserEntity = Depends(get_current_user),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.get_user(current_user.id or 0)
    return UserResponse.from_entity(user_entity)


@router.put('/me', response_model=UserResponse)
@Logger.io
async def update_me(
    request: UpdateUserRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateUserUseCase = Depends(UpdateUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.update(
        current_user.id or 0,
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
        password=request.password.get_secret_value() if request.password else None,
    )
    return UserResponse.from_entity(user_entity)


@router.delete('/me', response_model=DeleteResponse)
@Logger.io
async def delete_me(
    response: Response,
    current_user: UserEntity = Depends(get_current_user),
    use_case: DeleteUserUseCase = Depends(DeleteUserUseCase.depends),
) -> DeleteResponse:
    await use_case.delete(current_user.id or 0)
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return DeleteResponse(message='User deleted successfully')


@router.get('', response_model=List[UserResponse])
@Logger.io
async def list_users(
    current_user: UserEntity = Depends(require_admin),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> List[UserResponse]:
    users = await use_case.list_users()
    return [UserResponse.from_entity(user) for user in users]
