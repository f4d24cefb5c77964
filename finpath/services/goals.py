from typing import List, Optional, Sequence

from finpath.core.errors import ForbiddenError, NotFoundError, ValidationError
from finpath.core.logging import logger
from finpath.db import goals_repo
from finpath.schemas.goal import Goal, GoalCreate, GoalType, GoalUpdate

MAX_GOALS = 3
MIN_PRIORITY = 1
MAX_PRIORITY = 3


def validate_priority(priority: int) -> None:
    if priority < MIN_PRIORITY or priority > MAX_PRIORITY:
        raise ValidationError("Priority must be between 1 and 3", target="priority")


def validate_target_amount(target_amount: Optional[float]) -> None:
    if target_amount is not None and target_amount < 0:
        raise ValidationError("Target amount cannot be negative", target="target_amount")


def check_can_add(existing: Sequence[Goal], goal_type: GoalType, priority: int) -> None:
    validate_priority(priority)
    if len(existing) >= MAX_GOALS:
        raise ValidationError("Maximum 3 goals allowed. Delete an existing goal first.")
    if any(GoalType(g.goal_type) == goal_type for g in existing):
        raise ValidationError("You already have this goal type", target="goal_type")


def list_goals(user_id: int) -> List[Goal]:
    return goals_repo.list_goals(user_id)


def _owned_goal(user_id: int, goal_id: int) -> Goal:
    goal = goals_repo.get_goal(goal_id)
    if goal is None:
        raise NotFoundError("Goal not found", target="goal_id")
    if goal.user_id != user_id:
        raise ForbiddenError("Not authorized to access this goal")
    return goal


def create_goal(user_id: int, payload: GoalCreate) -> Goal:
    check_can_add(goals_repo.list_goals(user_id), payload.goal_type, payload.priority)
    validate_target_amount(payload.target_amount)
    goal = goals_repo.create_goal(
        user_id,
        payload.goal_type,
        payload.priority,
        payload.timeline,
        payload.target_amount or 0.0,
    )
    logger.info("goal_created", user_id=user_id, goal_type=payload.goal_type.value, priority=payload.priority)
    return goal


def update_goal(user_id: int, goal_id: int, payload: GoalUpdate) -> Goal:
    _owned_goal(user_id, goal_id)
    fields = payload.model_dump(exclude_none=True)
    if "priority" in fields:
        validate_priority(fields["priority"])
    validate_target_amount(fields.get("target_amount"))
    goal = goals_repo.update_goal(goal_id, fields)
    if goal is None:
        raise NotFoundError("Goal not found", target="goal_id")
    logger.info("goal_updated", user_id=user_id, goal_id=goal_id, fields=sorted(fields))
    return goal


def delete_goal(user_id: int, goal_id: int) -> None:
    _owned_goal(user_id, goal_id)
    goals_repo.delete_goal(goal_id)
    logger.info("goal_deleted", user_id=user_id, goal_id=goal_id)
