from enum import Enum
from pydantic import BaseModel, Field


class EmploymentStatus(str, Enum):
    STUDENT = "student"
    EMPLOYED = "employed"
    ENTREPRENEUR = "entrepreneur"
    OTHER = "other"


class UserProfile(BaseModel):
    monthly_income: float = Field(default=0.0, ge=0, description="Monthly net income")
    employment_status: EmploymentStatus = EmploymentStatus.OTHER

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [{"monthly_income": 4200.0, "employment_status": "employed"}]
        },
    }
