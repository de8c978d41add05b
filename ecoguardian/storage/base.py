from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..schemas import ActivityRecord, CarbonEntryCreate, Goal, GoalCreate


class ActivityStore(ABC):
    """Persistence for activity records and goals, scoped per user.

    Lists come back newest first; callers that need another order sort themselves.
    """

    @abstractmethod
    def create_entry(self, user_id: str, entry: CarbonEntryCreate) -> ActivityRecord: ...

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[ActivityRecord]: ...

    @abstractmethod
    def list_by_user_in_range(self, user_id: str, start: datetime, end: datetime) -> List[ActivityRecord]: ...

    @abstractmethod
    def create_goal(self, user_id: str, goal: GoalCreate) -> Goal: ...

    @abstractmethod
    def list_goals(self, user_id: str) -> List[Goal]: ...

    def get_active_goal(self, user_id: str) -> Optional[Goal]:
        goals = self.list_goals(user_id)
        return goals[0] if goals else None
