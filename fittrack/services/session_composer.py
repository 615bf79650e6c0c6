"""Live workout session: exercises being performed plus a running timer, before save."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any

from fittrack.core.constants import (
    DEFAULT_REPS_PER_SET,
    DEFAULT_REST_TIME,
    DEFAULT_SETS,
    MAX_EXERCISES_PER_SESSION,
)
from fittrack.core.exceptions import ComposerError
from fittrack.schemas.workout import ExerciseEntry, WorkoutCreate, totals_for


class SessionComposer:
    """
    In-memory builder for one workout. The timer starts on construction and
    on reset(); `clock` returns seconds (monotonic by default) so tests can drive it.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started = clock()
        self._entries: list[ExerciseEntry] = []

    @property
    def entries(self) -> list[ExerciseEntry]:
        return list(self._entries)

    def add_exercise(self, exercise: Any) -> ExerciseEntry:
        """Add a library exercise (ORM row or ExerciseRead) with 3 x 10 reps and 60s rest."""
        if len(self._entries) >= MAX_EXERCISES_PER_SESSION:
            raise ComposerError(f"Maximum {MAX_EXERCISES_PER_SESSION} exercises per session.")
        entry = ExerciseEntry(
            exercise_id=getattr(exercise, "id", None),
            name=exercise.name,
            sets=DEFAULT_SETS,
            reps=[DEFAULT_REPS_PER_SET] * DEFAULT_SETS,
            rest_time=DEFAULT_REST_TIME,
        )
        self._entries.append(entry)
        return entry

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise ComposerError(f"No exercise at position {index}.")

    def edit_exercise(self, index: int, **changes: Any) -> ExerciseEntry:
        """
        Replace fields of one entry; the result is re-validated. Changing sets
        without reps trims the rep list or pads it with the last set's count.
        """
        self._check_index(index)
        data = self._entries[index].model_dump()
        sets = changes.get("sets")
        if "reps" not in changes and isinstance(sets, int) and sets >= 0:
            reps = data["reps"][:sets]
            fill = reps[-1] if reps else DEFAULT_REPS_PER_SET
            changes["reps"] = reps + [fill] * (sets - len(reps))
        data.update(changes)
        entry = ExerciseEntry.model_validate(data)
        self._entries[index] = entry
        return entry

    def remove_exercise(self, index: int) -> ExerciseEntry:
        self._check_index(index)
        return self._entries.pop(index)

    def totals(self) -> tuple[int, int]:
        return totals_for(self._entries)

    @property
    def elapsed_seconds(self) -> int:
        return max(0, int(self._clock() - self._started))

    @property
    def duration_minutes(self) -> int:
        return self.elapsed_seconds // 60

    def format_timer(self) -> str:
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def build(self, workout_date: date | None = None) -> WorkoutCreate:
        """Snapshot the session as a save payload; workout_date defaults to today (UTC)."""
        if not self._entries:
            raise ComposerError("Add at least one exercise to save the workout.")
        total_sets, total_reps = self.totals()
        return WorkoutCreate(
            exercises=self.entries,
            duration_minutes=self.duration_minutes,
            total_sets=total_sets,
            total_reps=total_reps,
            workout_date=workout_date or datetime.now(timezone.utc).date(),
        )

    def reset(self) -> None:
        self._entries.clear()
        self._started = self._clock()
