from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.service.event_booking.domain.entity.category_entity import Category


class CategoryCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, category: Category) -> 'CategoryResponse':
        return cls(
            id=category.id or 0,
            name=category.name,
            description=category.description,
            created_at=category.created_at,
        )
