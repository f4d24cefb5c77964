from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

class ApiError(BaseModel):
    code: str = Field(..., description="Machine-readable error code (e.g. 'invalid_parameters', 'not_found', 'internal_error').")
    message: str = Field(..., description="Human-readable description of the error.")
    target: Optional[str] = Field(None, description="Field or resource the error refers to, when applicable.")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional diagnostic data.")
    request_id: Optional[str] = Field(None, description="Request identifier (X-Request-ID).")
    correlation_id: Optional[str] = Field(None, description="Correlation identifier (X-Correlation-ID).")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "invalid_parameters",
                    "message": "Progress must be between 0 and 100",
                    "target": "progress",
                    "details": None,
                    "request_id": "req-8fda1c1a",
                    "correlation_id": "corr-7a21b3ef",
                }
            ]
        }
    }

class MessageResponse(BaseModel):
    message: str
