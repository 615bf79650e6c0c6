"""ORM models - import all so Base.metadata is complete for migrations."""

from fittrack.models.exercise import Exercise
from fittrack.models.workout import WorkoutRecord

__all__ = [
    "Exercise",
    "WorkoutRecord",
]
