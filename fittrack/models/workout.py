"""WorkoutRecord model - one completed workout owned by a user."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import JSON, Date, DateTime, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fittrack.db.base import Base


class WorkoutRecord(Base):
    """A saved workout: the exercises performed plus totals precomputed at save time.

    total_sets/total_reps are trusted as stored; aggregation never re-derives them
    from the exercises payload.
    """

    __tablename__ = "workouts"
    __table_args__ = (
        Index("ix_workouts_owner_workout_date", "owner_id", "workout_date"),
        Index("ix_workouts_owner_created_at", "owner_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)
    exercises: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_reps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    workout_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
