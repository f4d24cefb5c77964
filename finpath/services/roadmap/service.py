import math
import threading
import weakref
from datetime import datetime, timezone
from typing import Tuple

from prometheus_client import Counter, Histogram

from finpath.config.settings import settings
from finpath.core.errors import NotFoundError, PreconditionError, ValidationError
from finpath.core.logging import logger
from finpath.db import goals_repo, items_repo, roadmap_repo, users_repo
from finpath.schemas.financial import FinancialState
from finpath.schemas.roadmap import Roadmap
from finpath.services.financial_state import aggregate_state
from finpath.services.roadmap.generator import generate_roadmap

ROADMAPS_GENERATED = Counter("finpath_roadmaps_generated_total", "Roadmaps generated")
ROADMAP_STEPS = Histogram("finpath_roadmap_steps", "Steps per generated roadmap", buckets=(0, 1, 2, 3, 4, 5, 6, 8, 10))

# Entries vanish once no caller holds the lock.
_locks: "weakref.WeakValueDictionary[int, threading.Lock]" = weakref.WeakValueDictionary()
_locks_guard = threading.Lock()


def _user_lock(user_id: int) -> threading.Lock:
    # Regenerate, progress update and delete for one user never interleave in-process;
    # the store adds a row lock for multi-process deployments.
    with _locks_guard:
        lock = _locks.get(user_id)
        if lock is None:
            lock = threading.Lock()
            _locks[user_id] = lock
        return lock


def _now() -> datetime:
    return datetime.now(timezone.utc)


def get_roadmap(user_id: int) -> Roadmap:
    roadmap = roadmap_repo.get_roadmap(user_id)
    if roadmap is None:
        raise NotFoundError("No roadmap found. Generate one first by calling POST /v1/roadmap/generate")
    return roadmap


def load_financial_state(user_id: int) -> FinancialState:
    return aggregate_state(items_repo.list_items(user_id))


def generate_for_user(user_id: int) -> Tuple[Roadmap, FinancialState]:
    profile = users_repo.get_profile(user_id)
    if profile is None:
        raise NotFoundError("User not found", target="profile")
    state = load_financial_state(user_id)
    goals = goals_repo.list_goals(user_id)
    if not goals:
        raise PreconditionError("Please set at least one financial goal before generating a roadmap")
    steps = generate_roadmap(
        profile,
        state,
        goals,
        max_steps=settings.roadmap_max_steps,
        clamp_progress=settings.roadmap_clamp_progress,
    )
    with _user_lock(user_id):
        roadmap = roadmap_repo.save_roadmap(user_id, steps, _now())
    ROADMAPS_GENERATED.inc()
    ROADMAP_STEPS.observe(len(steps))
    logger.info(
        "roadmap_generated",
        user_id=user_id,
        steps=len(steps),
        goals=[g.goal_type.value for g in goals],
    )
    return roadmap, state


def _validate_progress(progress: float) -> None:
    if not math.isfinite(progress) or progress < 0 or progress > 100:
        raise ValidationError("Progress must be between 0 and 100", target="progress")


def update_step_progress(user_id: int, step_number: int, progress: float) -> Roadmap:
    _validate_progress(progress)

    def apply(roadmap: Roadmap) -> Roadmap:
        for step in roadmap.steps:
            if step.step_number == step_number:
                step.current_progress = progress
                step.is_completed = progress == 100
                return roadmap
        raise NotFoundError("Step not found", target="step_number")

    with _user_lock(user_id):
        roadmap = roadmap_repo.update_roadmap(user_id, apply)
    if roadmap is None:
        raise NotFoundError("Roadmap not found")
    logger.info("roadmap_progress_updated", user_id=user_id, step_number=step_number, progress=progress)
    return roadmap


def delete_roadmap(user_id: int) -> None:
    with _user_lock(user_id):
        deleted = roadmap_repo.delete_roadmap(user_id)
    if not deleted:
        raise NotFoundError("No roadmap to delete")
    logger.info("roadmap_deleted", user_id=user_id)
