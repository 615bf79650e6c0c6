"""Application constants."""

# Session limits (workout composer)
MAX_EXERCISES_PER_SESSION = 20
MAX_SETS_PER_EXERCISE_PER_SESSION = 10

# Defaults for an exercise added to a live session
DEFAULT_SETS = 3
DEFAULT_REPS_PER_SET = 10
DEFAULT_REST_TIME = "60s"
