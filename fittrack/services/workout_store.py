"""Workout record store: owner-scoped CRUD and history queries over the workouts table."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.core.config import get_settings
from fittrack.core.exceptions import StoreError
from fittrack.models.workout import WorkoutRecord
from fittrack.schemas.workout import ExerciseEntry, WorkoutCreate, check_totals

logger = logging.getLogger(__name__)


class WorkoutStore:
    """
    Thin async wrapper over one session. Each call stands alone (no cross-call
    transaction); database failures are logged and raised as StoreError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _scalars(self, stmt, what: str) -> list[Any]:
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.exception("Workout store query failed (%s)", what)
            raise StoreError(what) from e
        return list(result.scalars().all())

    async def list_by_owner(self, owner_id: str) -> list[WorkoutRecord]:
        """All of the owner's workouts, newest first."""
        stmt = (
            select(WorkoutRecord)
            .where(WorkoutRecord.owner_id == owner_id)
            .order_by(WorkoutRecord.created_at.desc())
        )
        return await self._scalars(stmt, "list_by_owner")

    async def list_recent(self, owner_id: str, limit: int | None = None) -> list[WorkoutRecord]:
        """Latest saved workouts; limit defaults to Settings.recent_workouts_limit."""
        if limit is None:
            limit = get_settings().recent_workouts_limit
        stmt = (
            select(WorkoutRecord)
            .where(WorkoutRecord.owner_id == owner_id)
            .order_by(WorkoutRecord.created_at.desc())
            .limit(limit)
        )
        return await self._scalars(stmt, "list_recent")

    async def list_by_date_range(self, owner_id: str, start: date, end: date) -> list[WorkoutRecord]:
        """Workouts with start <= workout_date <= end, latest workout_date first."""
        stmt = (
            select(WorkoutRecord)
            .where(
                WorkoutRecord.owner_id == owner_id,
                WorkoutRecord.workout_date >= start,
                WorkoutRecord.workout_date <= end,
            )
            .order_by(WorkoutRecord.workout_date.desc(), WorkoutRecord.created_at.desc())
        )
        return await self._scalars(stmt, "list_by_date_range")

    async def list_workout_dates(self, owner_id: str) -> list[date]:
        """Only the workout_date column, one entry per workout (duplicates kept)."""
        stmt = (
            select(WorkoutRecord.workout_date)
            .where(WorkoutRecord.owner_id == owner_id)
            .order_by(WorkoutRecord.workout_date.desc())
        )
        return await self._scalars(stmt, "list_workout_dates")

    async def get(self, workout_id: uuid.UUID, owner_id: str | None = None) -> WorkoutRecord | None:
        stmt = select(WorkoutRecord).where(WorkoutRecord.id == workout_id)
        if owner_id is not None:
            stmt = stmt.where(WorkoutRecord.owner_id == owner_id)
        rows = await self._scalars(stmt, "get")
        return rows[0] if rows else None

    async def create(self, owner_id: str, payload: WorkoutCreate) -> WorkoutRecord:
        """Persist a finished session for owner_id."""
        record = WorkoutRecord(
            owner_id=owner_id,
            exercises=[e.model_dump(mode="json") for e in payload.exercises],
            duration_minutes=payload.duration_minutes,
            total_sets=payload.total_sets,
            total_reps=payload.total_reps,
            workout_date=payload.workout_date,
        )
        try:
            self.db.add(record)
            await self.db.flush()
            await self.db.refresh(record)
        except SQLAlchemyError as e:
            logger.exception("Saving workout for %s failed", owner_id)
            raise StoreError("create") from e
        logger.info("Saved workout %s for %s", record.id, owner_id)
        return record

    async def update(
        self,
        workout_id: uuid.UUID,
        fields: dict[str, Any],
        owner_id: str | None = None,
    ) -> WorkoutRecord | None:
        """
        Apply a partial update. owner_id/id/created_at are never changed. Totals always
        equal the sums over the exercises: they are re-derived when exercises change, and
        supplied totals that disagree raise TotalsMismatchError before anything is written.
        Returns None when the workout does not exist.
        """
        record = await self.get(workout_id, owner_id=owner_id)
        if record is None:
            return None
        # Every column is NOT NULL, so a None means "leave unchanged"
        data = {
            k: v
            for k, v in fields.items()
            if v is not None and k not in ("id", "owner_id", "created_at")
        }
        if "exercises" in data:
            entries = [ExerciseEntry.model_validate(e) for e in data["exercises"]]
            data["total_sets"], data["total_reps"] = check_totals(
                entries, data.get("total_sets"), data.get("total_reps")
            )
            data["exercises"] = [e.model_dump(mode="json") for e in entries]
        elif "total_sets" in data or "total_reps" in data:
            stored = [ExerciseEntry.model_validate(e) for e in record.exercises]
            check_totals(stored, data.get("total_sets"), data.get("total_reps"))
        for k, v in data.items():
            setattr(record, k, v)
        try:
            await self.db.flush()
            await self.db.refresh(record)
        except SQLAlchemyError as e:
            logger.exception("Updating workout %s failed", workout_id)
            raise StoreError("update") from e
        return record

    async def delete(self, workout_id: uuid.UUID, owner_id: str | None = None) -> bool:
        """Delete one workout; False when there was nothing to delete."""
        record = await self.get(workout_id, owner_id=owner_id)
        if record is None:
            return False
        try:
            await self.db.delete(record)
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.exception("Deleting workout %s failed", workout_id)
            raise StoreError("delete") from e
        logger.info("Deleted workout %s", workout_id)
        return True
