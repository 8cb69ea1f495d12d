from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_venue_repo import IVenueRepo
from src.service.event_booking.domain.entity.venue_entity import Venue
from src.service.event_booking.driven_adapter.model.venue_model import VenueModel


class VenueRepoImpl(IVenueRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, venue: Venue) -> Venue:
        async with self.session_factory() as session:
            venue_model = VenueModel(**self._entity_to_columns(venue))
            session.add(venue_model)
            await session.commit()
            await session.refresh(venue_model)
            return self._model_to_entity(venue_model)

    @Logger.io
    async def get_by_id(self, venue_id: int) -> Optional[Venue]:
        async with self.session_factory() as session:
            venue_model = await session.get(VenueModel, venue_id)
            return self._model_to_entity(venue_model) if venue_model else None

    @Logger.io
    async def list_venues(self) -> List[Venue]:
        async with self.session_factory() as session:
            result = await session.execute(select(VenueModel).order_by(VenueModel.name))
            return [self._model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def update(self, venue: Venue) -> Optional[Venue]:
        async with self.session_factory() as session:
            venue_model = await session.get(VenueModel, venue.id)
            if not venue_model:
                return None
            for column, value in self._entity_to_columns(venue).items():
                setattr(venue_model, column, value)
            await session.commit()
            await session.refresh(venue_model)
            return self._model_to_entity(venue_model)

    @Logger.io
    async def delete(self, venue_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(VenueModel).where(VenueModel.id == venue_id).returning(VenueModel.id)
            )
            deleted_id = result.scalar_one_or_none()
            await session.commit()
            return deleted_id is not None

    @staticmethod
    def _entity_to_columns(venue: Venue) -> dict:
        return {
            'name': venue.name,
            'address': venue.address,
            'city': venue.city,
            'state': venue.state,
            'postal_code': venue.postal_code,
            'country': venue.country,
            'longitude': venue.longitude,
            'latitude': venue.latitude,
            'capacity': venue.capacity,
            'images': list(venue.images),
        }

    @staticmethod
    def _model_to_entity(venue_model: VenueModel) -> Venue:
        return Venue(
            id=venue_model.id,
            name=venue_model.name,
            address=venue_model.address,
            city=venue_model.city,
            state=venue_model.state,
            postal_code=venue_model.postal_code,
            country=venue_model.country,
            longitude=venue_model.longitude,
            latitude=venue_model.latitude,
            capacity=venue_model.capacity,
            images=list(venue_model.images or []),
            created_at=venue_model.created_at,
        )
