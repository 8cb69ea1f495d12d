from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_category_repo import ICategoryRepo
from src.service.event_booking.domain.entity.category_entity import Category


class CategoryQueryUseCase:
    def __init__(self, category_repo: ICategoryRepo) -> None:
        self.category_repo = category_repo

    @classmethod
    @inject
    def depends(
        cls, category_repo: ICategoryRepo = Depends(Provide[Container.category_repo])
    ) -> Self:
        return cls(category_repo)

    @Logger.io
    async def get_category(self, category_id: int) -> Category:
        category = await self.category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError('Category not found')
        return category

    @Logger.io
    async def list_categories(self) -> List[Category]:
        return await self.category_repo.list_categories()
