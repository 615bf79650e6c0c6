"""Workout history endpoints, scoped to the calling user."""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, Query

from fittrack.api.deps import OwnerId, Store
from fittrack.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutUpdate

router = APIRouter()


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(owner_id: OwnerId, store: Store):
    """Full workout history, most recently saved first."""
    return await store.list_by_owner(owner_id)


@router.get("/recent", response_model=list[WorkoutRead])
async def list_recent_workouts(
    owner_id: OwnerId,
    store: Store,
    limit: int | None = Query(None, ge=1, le=50),
):
    """Latest saved workouts (limit defaults to Settings.recent_workouts_limit)."""
    return await store.list_recent(owner_id, limit)


@router.get("/range", response_model=list[WorkoutRead])
async def list_workouts_in_range(
    owner_id: OwnerId,
    store: Store,
    start: date,
    end: date,
):
    """Workouts whose workout_date falls in [start, end]."""
    if start > end:
        raise HTTPException(status_code=400, detail="start must be on or before end")
    return await store.list_by_date_range(owner_id, start, end)


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(payload: WorkoutCreate, owner_id: OwnerId, store: Store):
    """Save a finished session. Totals default to sums over the exercises."""
    return await store.create(owner_id, payload)


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(workout_id: uuid.UUID, owner_id: OwnerId, store: Store):
    workout = await store.get(workout_id, owner_id=owner_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.patch("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutUpdate,
    owner_id: OwnerId,
    store: Store,
):
    """Partial update. Totals must agree with the exercises (422 otherwise)."""
    workout = await store.update(
        workout_id,
        payload.model_dump(exclude_unset=True),
        owner_id=owner_id,
    )
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(workout_id: uuid.UUID, owner_id: OwnerId, store: Store):
    if not await store.delete(workout_id, owner_id=owner_id):
        raise HTTPException(status_code=404, detail="Workout not found")
    return None
