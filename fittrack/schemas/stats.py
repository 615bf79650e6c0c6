"""Derived, never-persisted aggregate schemas."""

from datetime import date

from pydantic import BaseModel


class WorkoutStats(BaseModel):
    """Totals and per-workout averages over one user's workout history."""

    total_workouts: int = 0
    total_sets: int = 0
    total_reps: int = 0
    total_minutes: int = 0
    average_workout_duration: int = 0
    average_sets_per_workout: int = 0
    average_reps_per_workout: int = 0


class Achievements(BaseModel):
    """Streak data derived from workout dates."""

    current_streak: int = 0
    max_streak: int = 0
    total_workout_days: int = 0
    last_workout_date: date | None = None
