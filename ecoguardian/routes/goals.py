import asyncio
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..dependencies import get_store, get_user_id
from ..schemas import Goal, GoalCreate
from ..storage.base import ActivityStore

router = APIRouter(prefix="/api/goals", tags=["goals"])


@router.post("", response_model=Goal)
async def create_goal(
    payload: GoalCreate,
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> Goal:
    return await asyncio.to_thread(store.create_goal, user_id, payload)


@router.get("", response_model=List[Goal])
async def list_goals(
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> List[Goal]:
    return await asyncio.to_thread(store.list_goals, user_id)


@router.get("/active", response_model=Optional[Goal])
async def active_goal(
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> Optional[Goal]:
    return await asyncio.to_thread(store.get_active_goal, user_id)
