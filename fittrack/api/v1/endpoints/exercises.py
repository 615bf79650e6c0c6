"""Exercise library CRUD endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.core.enums import MuscleGroup
from fittrack.db.session import get_db
from fittrack.models.exercise import Exercise
from fittrack.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate

router = APIRouter()

# Columns that may not be set to null through a PATCH
_NOT_NULL_FIELDS = ("name", "muscle_group", "difficulty")


async def _get_or_404(db: AsyncSession, exercise_id: uuid.UUID) -> Exercise:
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    muscle_group: MuscleGroup | None = None,
    q: str | None = None,
    skip: int = 0,
    limit: int = 100,
):
    """
    List exercises alphabetically. muscle_group filters exactly; q is a
    case-insensitive substring match on name or muscle group.
    """
    stmt = select(Exercise)
    if muscle_group:
        stmt = stmt.where(Exercise.muscle_group == muscle_group.value)
    if q:
        pattern = f"%{q}%"
        stmt = stmt.where(or_(Exercise.name.ilike(pattern), Exercise.muscle_group.ilike(pattern)))
    result = await db.execute(stmt.order_by(Exercise.name).offset(skip).limit(limit))
    return list(result.scalars().all())


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add an exercise to the library."""
    data = payload.model_dump()
    data["muscle_group"] = payload.muscle_group.value
    exercise = Exercise(**data)
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await _get_or_404(db, exercise_id)


@router.patch("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an exercise (partial). Sending instructions as null clears them."""
    exercise = await _get_or_404(db, exercise_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is None and k in _NOT_NULL_FIELDS:
            continue
        if k == "muscle_group":
            v = v.value
        setattr(exercise, k, v)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    exercise = await _get_or_404(db, exercise_id)
    await db.delete(exercise)
    await db.flush()
    return None
