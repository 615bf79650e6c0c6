"""Shared request dependencies: the calling user and the workout store."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.db.session import get_db
from fittrack.services.workout_store import WorkoutStore


async def get_owner_id(
    x_user_id: Annotated[str | None, Header(max_length=255)] = None,
) -> str:
    """
    Owner id of the authenticated user, forwarded by the auth provider / gateway
    in X-User-Id. Every owner-scoped endpoint takes it explicitly.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User must be authenticated (missing X-User-Id header)",
        )
    return x_user_id.strip()


async def get_workout_store(db: AsyncSession = Depends(get_db)) -> WorkoutStore:
    return WorkoutStore(db)


OwnerId = Annotated[str, Depends(get_owner_id)]
Store = Annotated[WorkoutStore, Depends(get_workout_store)]
