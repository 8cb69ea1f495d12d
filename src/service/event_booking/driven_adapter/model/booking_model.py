from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.column_type import UTCDateTime
from src.platform.database.orm_db_setting import Base


if TYPE_CHECKING:
    from src.service.event_booking.driven_adapter.model.event_model import EventModel
    from src.service.event_booking.driven_adapter.model.user_model import UserModel


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_reference: Mapped[str] = mapped_column(
        String(11), nullable=False, unique=True, index=True
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    event_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    ticket_type: Mapped[str] = mapped_column(String(20), nullable=False)
    seats_booked: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='confirmed', nullable=False, index=True)
    booking_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    cancellation_allowed: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    cancellation_deadline: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Events are deleted without cascading, so the join carries no FK
    event: Mapped[Optional['EventModel']] = relationship(
        'EventModel',
        primaryjoin='foreign(BookingModel.event_id) == EventModel.id',
        viewonly=True,
        lazy='selectin',
    )
    user: Mapped[Optional['UserModel']] = relationship(
        'UserModel',
        primaryjoin='foreign(BookingModel.user_id) == UserModel.id',
        viewonly=True,
        lazy='selectin',
    )
