"""Load a starter exercise library into an empty exercises table."""

import asyncio

from sqlalchemy import func, select

from fittrack.core.enums import Difficulty, MuscleGroup
from fittrack.db.session import async_session_maker, engine
from fittrack.models.exercise import Exercise

STARTER_EXERCISES = [
    ("Push Up", MuscleGroup.CHEST, Difficulty.BEGINNER, "Hands under shoulders, lower chest to the floor, press back up."),
    ("Bench Press", MuscleGroup.CHEST, Difficulty.INTERMEDIATE, "Lower the bar to mid-chest, press until arms are straight."),
    ("Pull Up", MuscleGroup.BACK, Difficulty.INTERMEDIATE, "Hang from the bar, pull until the chin clears it."),
    ("Bent Over Row", MuscleGroup.BACK, Difficulty.INTERMEDIATE, "Hinge at the hips, row the weight to the lower ribs."),
    ("Overhead Press", MuscleGroup.SHOULDERS, Difficulty.INTERMEDIATE, "Press the weight from shoulders to overhead lockout."),
    ("Bicep Curl", MuscleGroup.ARMS, Difficulty.BEGINNER, "Keep elbows fixed, curl the weight to the shoulders."),
    ("Tricep Dip", MuscleGroup.ARMS, Difficulty.BEGINNER, "Lower until elbows reach 90 degrees, press back up."),
    ("Squat", MuscleGroup.LEGS, Difficulty.BEGINNER, "Sit the hips back and down, drive up through the heels."),
    ("Deadlift", MuscleGroup.LEGS, Difficulty.ADVANCED, "Brace, keep the bar close, stand up by extending hips and knees."),
    ("Plank", MuscleGroup.CORE, Difficulty.BEGINNER, "Hold a straight line from head to heels on forearms."),
    ("Burpee", MuscleGroup.FULL_BODY, Difficulty.INTERMEDIATE, "Squat, kick back to a plank, return and jump."),
    ("Jumping Jacks", MuscleGroup.CARDIO, Difficulty.BEGINNER, "Jump feet apart while raising arms overhead, then return."),
]


async def main():
    async with async_session_maker() as session:
        existing = (await session.execute(select(func.count(Exercise.id)))).scalar_one()
        if existing:
            print(f"Exercise library already has {existing} entries; nothing to do.")
        else:
            for name, group, difficulty, instructions in STARTER_EXERCISES:
                session.add(
                    Exercise(
                        name=name,
                        muscle_group=group.value,
                        difficulty=difficulty,
                        instructions=instructions,
                    )
                )
            await session.commit()
            print(f"Seeded {len(STARTER_EXERCISES)} exercises.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
