import random
from types import SimpleNamespace

import pytest

from fittrack.schemas.stats import WorkoutStats
from fittrack.services.workout_stats import compute_stats


def _record(total_sets=None, total_reps=None, duration_minutes=None):
    return SimpleNamespace(total_sets=total_sets, total_reps=total_reps, duration_minutes=duration_minutes)


def test_empty_history_is_all_zero():
    assert compute_stats([]) == WorkoutStats()
    assert compute_stats([]).model_dump() == {
        "total_workouts": 0,
        "total_sets": 0,
        "total_reps": 0,
        "total_minutes": 0,
        "average_workout_duration": 0,
        "average_sets_per_workout": 0,
        "average_reps_per_workout": 0,
    }


def test_totals_and_averages():
    records = [_record(10, 100, 45), _record(12, 90, 60), _record(8, 80, 30)]
    stats = compute_stats(records)
    assert stats.total_workouts == 3
    assert stats.total_sets == 30
    assert stats.total_reps == 270
    assert stats.total_minutes == 135
    assert stats.average_workout_duration == 45
    assert stats.average_sets_per_workout == 10
    assert stats.average_reps_per_workout == 90


def test_averages_round_half_up():
    # 5 / 2 = 2.5 -> 3 and 7 / 2 = 3.5 -> 4 (round() would give 2 and 4)
    stats = compute_stats([_record(2, 3, 1), _record(3, 4, 2)])
    assert stats.average_sets_per_workout == 3
    assert stats.average_reps_per_workout == 4
    # 3 / 2 = 1.5 -> 2
    assert stats.average_workout_duration == 2


def test_averages_round_down_below_half():
    stats = compute_stats([_record(1, 1, 1), _record(0, 0, 0), _record(0, 0, 0)])
    assert stats.average_sets_per_workout == 0


def test_missing_fields_count_as_zero():
    stats = compute_stats([_record(None, None, None), _record(4, 40, 20), SimpleNamespace()])
    assert stats.total_workouts == 3
    assert stats.total_sets == 4
    assert stats.total_reps == 40
    assert stats.total_minutes == 20
    assert stats.average_reps_per_workout == 13


def test_non_numeric_field_counts_as_zero():
    stats = compute_stats([{"total_sets": "n/a", "total_reps": 5, "duration_minutes": 10}])
    assert stats.total_sets == 0
    assert stats.total_reps == 5


def test_mapping_records_accept_duration_alias():
    rows = [
        {"total_sets": 3, "total_reps": 30, "duration": 25},
        {"total_sets": 5, "total_reps": 50, "duration_minutes": 35},
    ]
    stats = compute_stats(rows)
    assert stats.total_minutes == 60
    assert stats.average_workout_duration == 30


def test_accepts_a_generator():
    stats = compute_stats(_record(1, 10, 5) for _ in range(4))
    assert stats.total_workouts == 4
    assert stats.total_reps == 40


def test_order_does_not_matter():
    rng = random.Random(7)
    records = [_record(rng.randint(0, 20), rng.randint(0, 200), rng.randint(0, 90)) for _ in range(25)]
    expected = compute_stats(records)
    for _ in range(5):
        shuffled = records[:]
        rng.shuffle(shuffled)
        assert compute_stats(shuffled) == expected


@pytest.mark.parametrize("count", [1, 2, 7])
def test_total_workouts_matches_record_count(count):
    records = [_record(2, 20, 10)] * count
    stats = compute_stats(records)
    assert stats.total_workouts == count
    assert stats.total_sets == 2 * count
