from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.column_types import UtcDateTime
from src.platform.database.db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        CheckConstraint(
            "status IN ('new', 'confirmed', 'rejected')", name='ck_booking_status'
        ),
        CheckConstraint('duration_minutes > 0', name='ck_booking_duration_positive'),
        Index('ix_booking_status_starts_at', 'status', 'starts_at'),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    discord_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    starts_at: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='new', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )
