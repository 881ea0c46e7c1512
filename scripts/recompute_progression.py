"""Rebuild cached progression state for every exercise (or the ones given on the command line).

Usage: python scripts/recompute_progression.py [exercise_id ...]
"""

import asyncio
import os
import sys
import uuid

# Add parent directory to path so we can import liftlog modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from liftlog.db.session import async_session_maker, engine
from liftlog.services.progression_recompute import (
    recompute_all_progression_states,
    recompute_many,
)


async def main(exercise_ids: list[uuid.UUID]):
    print("Connecting to database...")
    async with async_session_maker() as session:
        async with session.begin():
            if exercise_ids:
                count = await recompute_many(session, exercise_ids)
            else:
                count = await recompute_all_progression_states(session)
    print(f"Recomputed progression state for {count} exercise(s).")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main([uuid.UUID(arg) for arg in sys.argv[1:]]))
