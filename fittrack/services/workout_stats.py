"""Workout statistics and streak achievements.

Both functions are pure reductions over records that have already been fetched:
no I/O, no shared state, and the result does not depend on input order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from fittrack.schemas.stats import Achievements, WorkoutStats

logger = logging.getLogger(__name__)

# Mapping keys accepted in addition to the attribute name (raw query rows use "duration")
_FIELD_ALIASES = {"duration_minutes": ("duration",)}


def _field(record: Any, name: str) -> int:
    """Numeric field of an ORM row, pydantic model or mapping; missing/invalid counts as 0."""
    if isinstance(record, Mapping):
        value = record.get(name)
        for alias in _FIELD_ALIASES.get(name, ()):
            if value is None:
                value = record.get(alias)
    else:
        value = getattr(record, name, None)
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        logger.warning("Treating non-numeric %s=%r as 0", name, value)
        return 0


def _average(total: int, count: int) -> int:
    """total / count rounded half-up (2.5 -> 3), unlike round()'s banker's rounding."""
    return int((Decimal(total) / Decimal(count)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_stats(records: Iterable[Any]) -> WorkoutStats:
    """
    Aggregate a user's workouts into totals and per-workout averages.
    Records are not filtered by owner; pass one user's records only.
    """
    total_workouts = total_sets = total_reps = total_minutes = 0
    for record in records:
        total_workouts += 1
        total_sets += _field(record, "total_sets")
        total_reps += _field(record, "total_reps")
        total_minutes += _field(record, "duration_minutes")

    if total_workouts == 0:
        return WorkoutStats()

    return WorkoutStats(
        total_workouts=total_workouts,
        total_sets=total_sets,
        total_reps=total_reps,
        total_minutes=total_minutes,
        average_workout_duration=_average(total_minutes, total_workouts),
        average_sets_per_workout=_average(total_sets, total_workouts),
        average_reps_per_workout=_average(total_reps, total_workouts),
    )


def to_calendar_date(value: date | datetime | str) -> date:
    """
    Normalize a workout date to a UTC calendar date.
    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    Raises ValueError / TypeError for values that are not dates.
    """
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            value = datetime.fromisoformat(text)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Unsupported workout date type: {type(value).__name__}")


def _calendar_dates(values: Iterable[Any]) -> list[date]:
    out: list[date] = []
    for value in values:
        try:
            out.append(to_calendar_date(value))
        except (TypeError, ValueError):
            logger.warning("Skipping unparseable workout date %r in streak computation", value)
    return out


def compute_achievements(
    dates: Iterable[date | datetime | str],
    *,
    today: date | None = None,
    dedupe: bool = True,
) -> Achievements:
    """
    Current and longest run of consecutive workout days.

    dedupe=True collapses several workouts on one day into a single streak day
    (and total_workout_days counts distinct days). dedupe=False keeps every stored
    date: a same-day repeat is a zero-day gap that extends the running streak.

    The current streak is the final run when the latest workout is within one day
    of today, otherwise 0.
    """
    days = sorted(_calendar_dates(dates))
    if dedupe:
        days = sorted(set(days))
    if not days:
        return Achievements()

    today = today or datetime.now(timezone.utc).date()

    longest = 0
    run = 1
    for prev, curr in zip(days, days[1:]):
        if (curr - prev).days <= 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    last = days[-1]
    current = run if abs((today - last).days) <= 1 else 0

    return Achievements(
        current_streak=current,
        max_streak=longest,
        total_workout_days=len(days),
        last_workout_date=last,
    )
