from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.event_booking.domain.entity.venue_entity import Venue
from src.service.event_booking.driving_adapter.http_controller.schema.event_schema import (
    EventResponse,
)


class VenueCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    address: str
    city: str
    state: str
    country: str
    postal_code: Optional[str] = None
    capacity: int = Field(default=0, ge=0)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    images: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            'example': {
                'name': 'Taipei Arena',
                'address': 'No. 2, Sec. 4, Nanjing E. Rd.',
                'city': 'Taipei',
                'state': 'Taipei',
                'country': 'Taiwan',
                'postal_code': '105',
                'capacity': 15000,
                'longitude': 121.5497,
                'latitude': 25.0515,
                'images': ['arena-front.jpg'],
            }
        }


class VenueUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    images: Optional[List[str]] = None


class VenueResponse(BaseModel):
    id: int
    name: str
    address: str
    city: str
    state: str
    country: str
    postal_code: Optional[str] = None
    capacity: int
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    images: List[str]
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, venue: Venue) -> 'VenueResponse':
        return cls(
            id=venue.id or 0,
            name=venue.name,
            address=venue.address,
            city=venue.city,
            state=venue.state,
            country=venue.country,
            postal_code=venue.postal_code,
            capacity=venue.capacity,
            longitude=venue.longitude,
            latitude=venue.latitude,
            images=list(venue.images),
            created_at=venue.created_at,
        )


class VenueWithEventsResponse(VenueResponse):
    events: List[EventResponse] = Field(default_factory=list)
