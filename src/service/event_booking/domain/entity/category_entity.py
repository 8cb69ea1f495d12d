from datetime import datetime
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import DomainError


def _normalize_name(value: str) -> str:
    return (value or '').strip().lower()


def _validate_name(instance: Any, attribute: Any, value: str) -> None:
    if not value:
        raise DomainError('Category name is required')


@attrs.define
class Category:
    """Event category, names are unique regardless of case."""

    name: str = attrs.field(converter=_normalize_name, validator=_validate_name)
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@attrs.define(frozen=True)
class CategorySummary:
    id: int
    name: str
    description: Optional[str] = None
