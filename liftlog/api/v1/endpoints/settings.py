"""Progression settings (global weight increment)."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.db.session import get_db
from liftlog.schemas.progression import ProgressionSettingsRead, ProgressionSettingsUpdate
from liftlog.services import progression_store as store
from liftlog.services.progression_recompute import recompute_all_progression_states

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/progression", response_model=ProgressionSettingsRead)
async def get_progression_settings(db: AsyncSession = Depends(get_db)):
    return ProgressionSettingsRead(weight_jump_lb=await store.read_weight_jump_setting(db))


@router.put("/progression", response_model=ProgressionSettingsRead)
async def update_progression_settings(
    payload: ProgressionSettingsUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Change the weight increment. Cached suggestions depend on it, so every exercise is replayed."""
    current = await store.read_weight_jump_setting(db)
    await store.write_weight_jump_setting(db, payload.weight_jump_lb)
    if current != payload.weight_jump_lb:
        logger.info("Weight jump changed %s -> %s lb; recomputing all exercises", current, payload.weight_jump_lb)
        await recompute_all_progression_states(db)
    return ProgressionSettingsRead(weight_jump_lb=payload.weight_jump_lb)
