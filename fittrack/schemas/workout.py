"""Workout record schemas and the exercise-in-workout entry."""

from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fittrack.core.constants import MAX_EXERCISES_PER_SESSION, MAX_SETS_PER_EXERCISE_PER_SESSION
from fittrack.core.exceptions import TotalsMismatchError

RepCount = Annotated[int, Field(ge=0)]


class ExerciseEntry(BaseModel):
    """One exercise as performed in a workout: set count plus reps for each set."""

    exercise_id: UUID | None = None
    name: str = Field(..., min_length=1, max_length=255)
    sets: int = Field(0, ge=0, le=MAX_SETS_PER_EXERCISE_PER_SESSION)
    reps: list[RepCount] = Field(default_factory=list)
    notes: str | None = None
    duration: str | None = None
    rest_time: str | None = None

    @model_validator(mode="after")
    def _one_rep_count_per_set(self):
        if len(self.reps) != self.sets:
            raise ValueError(f"reps must hold one count per set ({self.sets} sets, {len(self.reps)} rep counts)")
        return self

    @property
    def total_reps(self) -> int:
        return sum(self.reps)


def totals_for(exercises: list[ExerciseEntry]) -> tuple[int, int]:
    """(total_sets, total_reps) summed over a workout's exercises."""
    return sum(e.sets for e in exercises), sum(e.total_reps for e in exercises)


def check_totals(
    exercises: list[ExerciseEntry],
    total_sets: int | None = None,
    total_reps: int | None = None,
) -> tuple[int, int]:
    """Totals derived from exercises; supplied totals must agree with them."""
    sets, reps = totals_for(exercises)
    if total_sets is not None and total_sets != sets:
        raise TotalsMismatchError(f"total_sets={total_sets} but exercises add up to {sets}")
    if total_reps is not None and total_reps != reps:
        raise TotalsMismatchError(f"total_reps={total_reps} but exercises add up to {reps}")
    return sets, reps


class WorkoutCreate(BaseModel):
    """Payload for saving a finished session. Totals, when given, must match the exercises."""

    exercises: list[ExerciseEntry] = Field(default_factory=list, max_length=MAX_EXERCISES_PER_SESSION)
    duration_minutes: int = Field(0, ge=0)
    total_sets: int | None = Field(None, ge=0)
    total_reps: int | None = Field(None, ge=0)
    workout_date: date

    @model_validator(mode="after")
    def _fill_totals(self):
        self.total_sets, self.total_reps = check_totals(self.exercises, self.total_sets, self.total_reps)
        return self


class WorkoutUpdate(BaseModel):
    exercises: list[ExerciseEntry] | None = Field(None, max_length=MAX_EXERCISES_PER_SESSION)
    duration_minutes: int | None = Field(None, ge=0)
    total_sets: int | None = Field(None, ge=0)
    total_reps: int | None = Field(None, ge=0)
    workout_date: date | None = None

    @model_validator(mode="after")
    def _totals_match_exercises(self):
        # totals-only updates are checked against the stored exercises by the store
        if self.exercises is not None:
            check_totals(self.exercises, self.total_sets, self.total_reps)
        return self


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    owner_id: str
    exercises: list[ExerciseEntry] = []
    duration_minutes: int
    total_sets: int
    total_reps: int
    workout_date: date
    created_at: datetime
