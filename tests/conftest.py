import random
from datetime import datetime, timedelta
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from ecoguardian.errors import CompletionError, RemoteFailure
from ecoguardian.main import create_app
from ecoguardian.schemas import ActivityRecord, Category
from ecoguardian.settings import Settings
from ecoguardian.storage.memory import MemoryActivityStore

NOW = datetime(2025, 6, 15, 12, 0, 0)


class FakeCompletion:
    """Completion client that returns a canned reply or raises."""

    def __init__(self, reply: str = "", error: Optional[RemoteFailure] = None):
        self.reply = reply
        self.error = error
        self.calls: List[dict] = []

    async def complete(self, system_prompt, user_prompt, max_tokens, temperature, json_output=False):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "json_output": json_output,
            }
        )
        if self.error is not None:
            raise CompletionError(self.error)
        return self.reply


def make_record(category: str, amount: float, when: datetime, user_id: str = "user-1") -> ActivityRecord:
    return ActivityRecord(
        id=f"{category}-{when.isoformat()}-{amount}",
        userId=user_id,
        category=Category(category),
        amount=amount,
        date=when,
    )


@pytest.fixture
def scenario_records() -> List[ActivityRecord]:
    return [
        make_record("transportation", 10.0, NOW - timedelta(hours=1)),
        make_record("energy", 5.0, NOW - timedelta(days=8)),
        make_record("food", 3.0, NOW - timedelta(days=40)),
    ]


@pytest.fixture
def fake_completion() -> FakeCompletion:
    return FakeCompletion(error=RemoteFailure.RATE_LIMITED)


@pytest.fixture
def store() -> MemoryActivityStore:
    return MemoryActivityStore()


@pytest.fixture
def client(store, fake_completion) -> TestClient:
    app = create_app(
        settings=Settings.model_validate({}),
        store=store,
        completion=fake_completion,
        rng=random.Random(42),
    )
    return TestClient(app, headers={"X-User-Id": "user-1"})
