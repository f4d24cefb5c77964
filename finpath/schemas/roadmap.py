from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from finpath.schemas.financial import FinancialState


class StepCategory(str, Enum):
    FOUNDATION = "foundation"
    WEALTH_BUILDING = "wealth-building"
    ADVANCED = "advanced"
    PREPARATION = "preparation"


class RoadmapStep(BaseModel):
    step_number: int = Field(..., ge=1)
    title: str
    description: str
    category: StepCategory
    priority: int = Field(..., ge=1, le=5, description="Internal ranking used for ordering and truncation")
    can_run_parallel: bool = False
    target_amount: float = Field(default=0.0, ge=0, description="0 means no monetary target")
    current_progress: float = Field(default=0.0, ge=0)
    is_completed: bool = False
    reasoning: str = ""


class Roadmap(BaseModel):
    user_id: int
    steps: List[RoadmapStep] = Field(default_factory=list)
    last_generated: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProgressUpdate(BaseModel):
    progress: float

    model_config = {
        "json_schema_extra": {"examples": [{"progress": 65}]}
    }


class RoadmapResponse(BaseModel):
    roadmap: Roadmap


class GeneratedRoadmapResponse(BaseModel):
    message: str
    roadmap: Roadmap
    financial_state: FinancialState
