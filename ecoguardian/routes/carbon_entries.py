import asyncio
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_store, get_user_id, load_records
from ..models.analytics_schema import CarbonAnalytics, CarbonStats
from ..schemas import ActivityRecord, CarbonEntryCreate
from ..services.aggregation import compute_analytics, compute_stats, to_local
from ..storage.base import ActivityStore

router = APIRouter(prefix="/api/carbon-entries", tags=["carbon"])


@router.post("", response_model=ActivityRecord)
async def create_entry(
    payload: CarbonEntryCreate,
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> ActivityRecord:
    return await asyncio.to_thread(store.create_entry, user_id, payload)


@router.get("", response_model=List[ActivityRecord])
async def list_entries(
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> List[ActivityRecord]:
    return await load_records(store, user_id)


@router.get("/range", response_model=List[ActivityRecord])
async def list_entries_in_range(
    start: datetime,
    end: datetime,
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> List[ActivityRecord]:
    start, end = to_local(start), to_local(end)
    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return await asyncio.to_thread(store.list_by_user_in_range, user_id, start, end)


@router.get("/stats", response_model=CarbonStats)
async def stats(
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> CarbonStats:
    return compute_stats(await load_records(store, user_id))


@router.get("/analytics", response_model=CarbonAnalytics)
async def analytics(
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> CarbonAnalytics:
    return compute_analytics(await load_records(store, user_id))
