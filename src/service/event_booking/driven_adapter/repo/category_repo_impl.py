from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_category_repo import ICategoryRepo
from src.service.event_booking.domain.entity.category_entity import Category
from src.service.event_booking.driven_adapter.model.category_model import CategoryModel


class CategoryRepoImpl(ICategoryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, category: Category) -> Category:
        async with self.session_factory() as session:
            category_model = CategoryModel(name=category.name, description=category.description)
            session.add(category_model)
            await session.commit()
            await session.refresh(category_model)
            return self._model_to_entity(category_model)

    @Logger.io
    async def get_by_id(self, category_id: int) -> Optional[Category]:
        async with self.session_factory() as session:
            category_model = await session.get(CategoryModel, category_id)
            return self._model_to_entity(category_model) if category_model else None

    @Logger.io
    async def list_categories(self) -> List[Category]:
        async with self.session_factory() as session:
            result = await session.execute(select(CategoryModel).order_by(CategoryModel.name))
            return [self._model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def update(self, category: Category) -> Optional[Category]:
        async with self.session_factory() as session:
            category_model = await session.get(CategoryModel, category.id)
            if not category_model:
                return None
            category_model.name = category.name
            category_model.description = category.description
            await session.commit()
            await session.refresh(category_model)
            return self._model_to_entity(category_model)

    @Logger.io
    async def delete(self, category_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(CategoryModel)
                .where(CategoryModel.id == category_id)
                .returning(CategoryModel.id)
            )
            deleted_id = result.scalar_one_or_none()
            await session.commit()
            return deleted_id is not None

    @staticmethod
    def _model_to_entity(category_model: CategoryModel) -> Category:
        return Category(
            id=category_model.id,
            name=category_model.name,
            description=category_model.description,
            created_at=category_model.created_at,
        )
