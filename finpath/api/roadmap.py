from fastapi import APIRouter, Depends

from finpath.api.common import ApiError, MessageResponse
from finpath.api.deps import get_current_user_id
from finpath.schemas.roadmap import GeneratedRoadmapResponse, ProgressUpdate, RoadmapResponse
from finpath.services.roadmap import service

router = APIRouter(prefix="/v1/roadmap", tags=["Roadmap"])


@router.get("", summary="Stored roadmap", response_model=RoadmapResponse, responses={404: {"model": ApiError}})
def get_roadmap(user_id: int = Depends(get_current_user_id)):
    return {"roadmap": service.get_roadmap(user_id)}


@router.post(
    "/generate",
    summary="Generate roadmap",
    description="Builds the roadmap from the profile, financial items and goals, replacing any stored one.",
    response_model=GeneratedRoadmapResponse,
    responses={400: {"model": ApiError}, 404: {"model": ApiError}},
)
def generate(user_id: int = Depends(get_current_user_id)):
    """
    Accepts:
      - no body; everything is read from the user's stored data

    Returns:
      - roadmap: at most 6 steps ordered by priority, numbered from 1
      - financial_state: the snapshot the roadmap was derived from
    """
    roadmap, state = service.generate_for_user(user_id)
    return {"message": "Roadmap generated successfully", "roadmap": roadmap, "financial_state": state}


@router.put(
    "/progress/{step_number}",
    summary="Update step progress",
    response_model=RoadmapResponse,
    responses={400: {"model": ApiError}, 404: {"model": ApiError}},
)
def update_progress(step_number: int, payload: ProgressUpdate, user_id: int = Depends(get_current_user_id)):
    return {"roadmap": service.update_step_progress(user_id, step_number, payload.progress)}


@router.delete("", summary="Delete roadmap", response_model=MessageResponse, responses={404: {"model": ApiError}})
def delete_roadmap(user_id: int = Depends(get_current_user_id)):
    service.delete_roadmap(user_id)
    return {"message": "Roadmap deleted successfully"}
