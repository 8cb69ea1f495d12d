from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.column_type import UTCDateTime
from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.event_booking.driven_adapter.model.category_model import CategoryModel
    from src.service.event_booking.driven_adapter.model.user_model import UserModel
    from src.service.event_booking.driven_adapter.model.venue_model import VenueModel


class EventModel(Base):
    __tablename__ = 'event'
    __table_args__ = (
        CheckConstraint('available_seats >= 0', name='ck_event_available_seats_non_negative'),
        CheckConstraint(
            'available_seats <= total_capacity', name='ck_event_available_seats_within_capacity'
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    start_date_time: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)
    end_date_time: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)
    venue_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('venue.id'), nullable=False, index=True
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('category.id'), nullable=False, index=True
    )
    total_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    event_type: Mapped[str] = mapped_column(String(20), default='in-person', nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='draft', nullable=False, index=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_by: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    ticket_tiers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    venue: Mapped[Optional['VenueModel']] = relationship(
        'VenueModel', viewonly=True, lazy='selectin'
    )
    category: Mapped[Optional['CategoryModel']] = relationship(
        'CategoryModel', viewonly=True, lazy='selectin'
    )
    # Users can be deleted without touching their events, so the join carries no FK
    creator: Mapped[Optional['UserModel']] = relationship(
        'UserModel',
        primaryjoin='foreign(EventModel.created_by) == UserModel.id',
        viewonly=True,
        lazy='selectin',
    )
