from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.category_command_use_case import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    UpdateCategoryUseCase,
)
from src.service.event_booking.app.query.category_query_use_case import CategoryQueryUseCase
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)
from src.service.event_booking.driving_adapter.http_controller.schema.category_schema import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
)
from src.service.event_booking.driving_adapter.http_controller.schema.common_schema import (
    DeleteResponse,
)


router = APIRouter()


@router.get('', response_model=List[CategoryResponse])
@Logger.io
async def list_categories(
    use_case: CategoryQueryUseCase = Depends(CategoryQueryUseCase.depends),
) -> List[CategoryResponse]:
    categories = await use_case.list_categories()
    return [CategoryResponse.from_entity(category) for category in categories]


@router.get('/{category_id}', response_model=CategoryResponse)
@Logger.io
async def get_category(
    category_id: int,
    use_case: CategoryQueryUseCase = Depends(CategoryQueryUseCase.depends),
) -> CategoryResponse:
    return CategoryResponse.from_entity(await use_case.get_category(category_id))


@router.post('', response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_category(
    request: CategoryCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateCategoryUseCase = Depends(CreateCategoryUseCase.depends),
) -> CategoryResponse:
    category = await use_case.create(name=request.name, description=request.description)
    return CategoryResponse.from_entity(category)


@router.put('/{category_id}', response_model=CategoryResponse)
@Logger.io
async def update_category(
    category_id: int,
    request: CategoryUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateCategoryUseCase = Depends(UpdateCategoryUseCase.depends),
) -> CategoryResponse:
    category = await use_case.update(
        category_id, name=request.name, description=request.description
    )
    return CategoryResponse.from_entity(category)


@router.delete('/{category_id}', response_model=DeleteResponse)
@Logger.io
async def delete_category(
    category_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteCategoryUseCase = Depends(DeleteCategoryUseCase.depends),
) -> DeleteResponse:
    await use_case.delete(category_id)
    return DeleteResponse(message='Category deleted successfully')
