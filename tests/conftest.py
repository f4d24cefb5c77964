import os
from datetime import datetime, timezone
from itertools import count

import jwt
import pytest

os.environ["PG_DSN"] = ""
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-finpath-tests-0001"

from finpath.db import goals_repo, items_repo, roadmap_repo, users_repo
from finpath.schemas.financial import FinancialItem
from finpath.schemas.goal import Goal
from finpath.schemas.roadmap import Roadmap

TEST_SECRET = "test-secret-key-for-finpath-tests-0001"


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'dev')
    monkeypatch.setenv('PG_DSN', '')
    monkeypatch.setenv('JWT_SECRET_KEY', TEST_SECRET)


def make_token(user_id, token_type="access", secret=TEST_SECRET):
    return jwt.encode({"sub": str(user_id), "type": token_type}, secret, algorithm="HS256")


def auth(user_id=1):
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def _now():
    return datetime.now(timezone.utc)


class FakeDb:
    """Dict-backed stand-in for the postgres repositories."""

    def __init__(self):
        self.profiles = {}
        self.items = {}
        self.goals = {}
        self.roadmaps = {}
        self._ids = count(1)

    # users_repo
    def get_profile(self, user_id):
        return self.profiles.get(user_id)

    def upsert_profile(self, user_id, profile):
        self.profiles[user_id] = profile
        return profile

    # items_repo
    def list_items(self, user_id):
        found = [it for it in self.items.values() if it.user_id == user_id]
        return sorted(found, key=lambda it: it.id, reverse=True)

    def get_item(self, item_id):
        return self.items.get(item_id)

    def create_item(self, user_id, payload):
        item = FinancialItem(id=next(self._ids), user_id=user_id, created_at=_now(), updated_at=_now(), **payload.model_dump())
        self.items[item.id] = item
        return item

    def update_item(self, item_id, fields):
        item = self.items.get(item_id)
        if item is None:
            return None
        item = item.model_copy(update={**fields, "updated_at": _now()})
        self.items[item_id] = item
        return item

    def delete_item(self, item_id):
        return self.items.pop(item_id, None) is not None

    # goals_repo
    def list_goals(self, user_id):
        found = [g for g in self.goals.values() if g.user_id == user_id]
        return sorted(found, key=lambda g: (g.priority, g.id))

    def get_goal(self, goal_id):
        return self.goals.get(goal_id)

    def create_goal(self, user_id, goal_type, priority, timeline, target_amount):
        goal = Goal(
            id=next(self._ids), user_id=user_id, goal_type=goal_type, priority=priority,
            timeline=timeline, target_amount=target_amount, created_at=_now(), updated_at=_now(),
        )
        self.goals[goal.id] = goal
        return goal

    def update_goal(self, goal_id, fields):
        goal = self.goals.get(goal_id)
        if goal is None:
            return None
        goal = goal.model_copy(update={**fields, "updated_at": _now()})
        self.goals[goal_id] = goal
        return goal

    def delete_goal(self, goal_id):
        return self.goals.pop(goal_id, None) is not None

    # roadmap_repo
    def get_roadmap(self, user_id):
        rm = self.roadmaps.get(user_id)
        return rm.model_copy(deep=True) if rm else None

    def save_roadmap(self, user_id, steps, generated_at):
        existing = self.roadmaps.get(user_id)
        rm = Roadmap(
            user_id=user_id,
            steps=steps,
            last_generated=generated_at,
            created_at=existing.created_at if existing else _now(),
            updated_at=_now(),
        )
        self.roadmaps[user_id] = rm
        return rm.model_copy(deep=True)

    def update_roadmap(self, user_id, mutate):
        rm = self.roadmaps.get(user_id)
        if rm is None:
            return None
        updated = mutate(rm.model_copy(deep=True))
        updated.updated_at = _now()
        self.roadmaps[user_id] = updated
        return updated.model_copy(deep=True)

    def delete_roadmap(self, user_id):
        return self.roadmaps.pop(user_id, None) is not None


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDb()
    for module, names in (
        (users_repo, ("get_profile", "upsert_profile")),
        (items_repo, ("list_items", "get_item", "create_item", "update_item", "delete_item")),
        (goals_repo, ("list_goals", "get_goal", "create_goal", "update_goal", "delete_goal")),
        (roadmap_repo, ("get_roadmap", "save_roadmap", "update_roadmap", "delete_roadmap")),
    ):
        for name in names:
            monkeypatch.setattr(module, name, getattr(db, name))
    return db


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from finpath.main import app
    return TestClient(app, raise_server_exceptions=False)
