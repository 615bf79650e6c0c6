"""Domain errors and the FastAPI handlers that render them."""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class StoreError(Exception):
    """The workout record store could not complete a call."""


class StatsUnavailableError(Exception):
    """Stats or achievements could not be computed because the records could not be fetched."""

    def __init__(self, owner_id: str):
        super().__init__(f"Stats unavailable for owner {owner_id}")
        self.owner_id = owner_id


class ComposerError(ValueError):
    """Invalid operation on an in-progress workout session."""


class TotalsMismatchError(ValueError):
    """total_sets/total_reps disagree with the sums over the workout's exercises."""


async def totals_mismatch_handler(request: Request, exc: TotalsMismatchError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


async def store_exception_handler(request: Request, exc: StoreError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable", "detail": "Workout store unavailable"},
    )


async def stats_unavailable_handler(request: Request, exc: StatsUnavailableError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable", "detail": "Stats unavailable"},
    )
