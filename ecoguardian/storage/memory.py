import threading
import uuid
from datetime import datetime
from typing import Dict, List

from ..schemas import ActivityRecord, CarbonEntryCreate, Goal, GoalCreate
from .base import ActivityStore


class MemoryActivityStore(ActivityStore):
    """Dict-backed store for tests and local demos."""

    def __init__(self):
        self._entries: Dict[str, ActivityRecord] = {}
        self._goals: Dict[str, Goal] = {}
        self._lock = threading.Lock()

    def create_entry(self, user_id: str, entry: CarbonEntryCreate) -> ActivityRecord:
        record = ActivityRecord(
            id=str(uuid.uuid4()),
            userId=user_id,
            category=entry.category,
            amount=entry.amount,
            description=entry.description,
            date=entry.date or datetime.now(),
        )
        with self._lock:
            self._entries[record.id] = record
        return record

    def list_by_user(self, user_id: str) -> List[ActivityRecord]:
        with self._lock:
            records = [r for r in self._entries.values() if r.userId == user_id]
        # newest first; later inserts win ties
        return sorted(reversed(records), key=lambda r: r.date, reverse=True)

    def list_by_user_in_range(self, user_id: str, start: datetime, end: datetime) -> List[ActivityRecord]:
        return [r for r in self.list_by_user(user_id) if start <= r.date <= end]

    def create_goal(self, user_id: str, goal: GoalCreate) -> Goal:
        created = Goal(
            id=str(uuid.uuid4()),
            userId=user_id,
            category=goal.category,
            targetAmount=goal.targetAmount,
            period=goal.period,
            createdAt=datetime.now(),
        )
        with self._lock:
            self._goals[created.id] = created
        return created

    def list_goals(self, user_id: str) -> List[Goal]:
        with self._lock:
            goals = [g for g in self._goals.values() if g.userId == user_id]
        return sorted(reversed(goals), key=lambda g: g.createdAt, reverse=True)
