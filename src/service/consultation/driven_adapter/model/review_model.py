from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.column_types import UtcDateTime
from src.platform.database.db_setting import Base


class ReviewModel(Base):
    __tablename__ = 'review'
    __table_args__ = (
        CheckConstraint('rating BETWEEN 1 AND 5', name='ck_review_rating_range'),
        CheckConstraint(
            "status IN ('pending', 'verified', 'published')", name='ck_review_status'
        ),
        Index('ix_review_status_published_at', 'status', 'published_at'),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    # SHA-256 hex digest, cleared once verified
    verification_code_hash: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    verification_expires_at: Mapped[Optional[datetime]] = mapped_column(
        UtcDateTime(), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )
    verified_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(
        UtcDateTime(), nullable=True
    )
