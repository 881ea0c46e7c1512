import asyncio
import os
import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# Add project root to sys.path
sys.path.append(os.getcwd())

from liftlog.db.session import async_session_maker, engine


async def check_data():
    async with async_session_maker() as session:
        tables = ["exercises", "workouts", "workout_sets", "progression_state", "app_settings"]
        print(f"Checking tables: {tables}")
        for table in tables:
            try:
                result = await session.execute(text(f"SELECT count(*) FROM {table}"))
                print(f"Table '{table}' row count: {result.scalar()}")
            except SQLAlchemyError as e:
                print(f"Error querying {table}: {e}")

        # Exercises that have sets but no cached progression row need a recompute
        result = await session.execute(text(
            "SELECT count(DISTINCT s.exercise_id) FROM workout_sets s "
            "LEFT JOIN progression_state p ON p.exercise_id = s.exercise_id "
            "WHERE p.exercise_id IS NULL"
        ))
        missing = result.scalar()
        if missing:
            print(f"{missing} exercise(s) have sets but no progression state; run scripts/recompute_progression.py")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(check_data())
