from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class GoalType(str, Enum):
    EMERGENCY_FUND = "emergency_fund"
    DEBT_FREEDOM = "debt_freedom"
    START_INVESTING = "start_investing"
    START_BUSINESS = "start_business"
    RETIRE_EARLY = "retire_early"
    PASSIVE_INCOME = "passive_income"


class Timeline(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class GoalStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Goal(BaseModel):
    id: Optional[int] = None
    user_id: Optional[int] = None
    goal_type: GoalType
    priority: int = Field(..., description="1 = highest, 3 = lowest")
    timeline: Timeline = Timeline.MEDIUM
    status: GoalStatus = GoalStatus.NOT_STARTED
    target_amount: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GoalCreate(BaseModel):
    goal_type: GoalType
    priority: int
    timeline: Timeline = Timeline.MEDIUM
    target_amount: Optional[float] = None


class GoalUpdate(BaseModel):
    priority: Optional[int] = None
    timeline: Optional[Timeline] = None
    status: Optional[GoalStatus] = None
    target_amount: Optional[float] = None


class GoalsResponse(BaseModel):
    goals: List[Goal]
    count: int
