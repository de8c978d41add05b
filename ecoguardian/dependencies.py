import asyncio
import random
from typing import List

from fastapi import Header, HTTPException, Request

from .schemas import ActivityRecord
from .services.advisor import AdvisorService
from .services.predictions import PredictionService
from .storage.base import ActivityStore


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    # stand-in for the session layer: the caller's id arrives in X-User-Id
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_id.strip()


def get_store(request: Request) -> ActivityStore:
    return request.app.state.store


def get_advisor(request: Request) -> AdvisorService:
    return request.app.state.advisor


def get_predictions(request: Request) -> PredictionService:
    return request.app.state.predictions


def get_rng(request: Request) -> random.Random:
    return request.app.state.rng


async def load_records(store: ActivityStore, user_id: str) -> List[ActivityRecord]:
    return await asyncio.to_thread(store.list_by_user, user_id)
