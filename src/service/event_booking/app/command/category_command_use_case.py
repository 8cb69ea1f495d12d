"""Category use cases (admin only)."""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_category_repo import ICategoryRepo
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.domain.entity.category_entity import Category


class CreateCategoryUseCase:
    def __init__(self, category_repo: ICategoryRepo) -> None:
        self.category_repo = category_repo

    @classmethod
    @inject
    def depends(
        cls, category_repo: ICategoryRepo = Depends(Provide[Container.category_repo])
    ) -> Self:
        return cls(category_repo)

    @Logger.io
    async def create(self, name: str, description: Optional[str] = None) -> Category:
        return await self.category_repo.create(Category(name=name, description=description))


class UpdateCategoryUseCase:
    def __init__(self, category_repo: ICategoryRepo) -> None:
        self.category_repo = category_repo

    @classmethod
    @inject
    def depends(
        cls, category_repo: ICategoryRepo = Depends(Provide[Container.category_repo])
    ) -> Self:
        return cls(category_repo)

    @Logger.io
    async def update(
        self, category_id: int, name: Optional[str] = None, description: Optional[str] = None
    ) -> Category:
        category = await self.category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError('Category not found')

        if name is not None:
            category.name = name
        if description is not None:
            category.description = description

        updated = await self.category_repo.update(category)
        if not updated:
            raise NotFoundError('Category not found')
        return updated


class DeleteCategoryUseCase:
    def __init__(self, category_repo: ICategoryRepo, event_query_repo: IEventQueryRepo) -> None:
        self.category_repo = category_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        category_repo: ICategoryRepo = Depends(Provide[Container.category_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(category_repo, event_query_repo)

    @Logger.io
    async def delete(self, category_id: int) -> bool:
        if await self.event_query_repo.list_events(category_id=category_id):
            raise ConflictError('Category is still used by events and cannot be deleted')
        if not await self.category_repo.delete(category_id):
            raise NotFoundError('Category not found')
        return True
