"""Workout statistics and streak achievements for the calling user."""

from fastapi import APIRouter

from fittrack.api.deps import OwnerId, Store
from fittrack.core.config import get_settings
from fittrack.core.exceptions import StatsUnavailableError, StoreError
from fittrack.schemas.stats import Achievements, WorkoutStats
from fittrack.services.workout_stats import compute_achievements, compute_stats

router = APIRouter()


@router.get("", response_model=WorkoutStats)
async def get_workout_stats(owner_id: OwnerId, store: Store):
    """Totals (workouts, sets, reps, minutes) and rounded per-workout averages."""
    try:
        records = await store.list_by_owner(owner_id)
    except StoreError as e:
        raise StatsUnavailableError(owner_id) from e
    return compute_stats(records)


@router.get("/achievements", response_model=Achievements)
async def get_achievements(owner_id: OwnerId, store: Store):
    """
    Current streak (consecutive workout days ending today or yesterday),
    longest streak, workout day count and the latest workout date.
    """
    try:
        dates = await store.list_workout_dates(owner_id)
    except StoreError as e:
        raise StatsUnavailableError(owner_id) from e
    return compute_achievements(dates, dedupe=get_settings().streak_dedupe_same_day)
