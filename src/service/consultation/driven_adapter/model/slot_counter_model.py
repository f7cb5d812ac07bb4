from datetime import datetime

from sqlalchemy import CheckConstraint, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.column_types import UtcDateTime
from src.platform.database.db_setting import Base


class SlotCounterModel(Base):
    __tablename__ = 'slot_counter'
    __table_args__ = (
        CheckConstraint('used >= 0', name='ck_slot_counter_used_non_negative'),
        CheckConstraint('month BETWEEN 1 AND 12', name='ck_slot_counter_month_range'),
    )

    year: Mapped[int] = mapped_column(Integer, primary_key=True)
    month: Mapped[int] = mapped_column(Integer, primary_key=True)
    used: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default='0')
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )
