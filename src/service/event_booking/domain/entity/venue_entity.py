from datetime import datetime
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import DomainError


def _validate_name(instance: Any, attribute: Any, value: str) -> None:
    if not value or not value.strip():
        raise DomainError('Venue name is required')


def _validate_capacity(instance: Any, attribute: Any, value: int) -> None:
    if value < 0:
        raise DomainError('Capacity must not be negative')


def _validate_latitude(instance: Any, attribute: Any, value: Optional[float]) -> None:
    if value is not None and not -90 <= value <= 90:
        raise DomainError('Latitude must be between -90 and 90')


def _validate_longitude(instance: Any, attribute: Any, value: Optional[float]) -> None:
    if value is not None and not -180 <= value <= 180:
        raise DomainError('Longitude must be between -180 and 180')


@attrs.define
class Venue:
    name: str = attrs.field(validator=_validate_name, converter=str.strip)
    address: str
    city: str
    state: str
    country: str
    postal_code: Optional[str] = None
    capacity: int = attrs.field(default=0, validator=_validate_capacity)
    longitude: Optional[float] = attrs.field(default=None, validator=_validate_longitude)
    latitude: Optional[float] = attrs.field(default=None, validator=_validate_latitude)
    images: list[str] = attrs.field(factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def apply_changes(self, changes: dict[str, Any]) -> 'Venue':
        allowed = {a.name for a in attrs.fields(Venue)} - {'id', 'created_at'}
        return attrs.evolve(self, **{k: v for k, v in changes.items() if k in allowed})


@attrs.define(frozen=True)
class VenueSummary:
    """Venue fields shown on event and booking reads."""

    id: int
    name: str
    address: str
    city: str
    country: str
    capacity: int = 0
    images: list[str] = attrs.field(factory=list)
