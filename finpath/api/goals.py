from fastapi import APIRouter, Depends

from finpath.api.common import ApiError, MessageResponse
from finpath.api.deps import get_current_user_id
from finpath.schemas.goal import Goal, GoalCreate, GoalsResponse, GoalUpdate
from finpath.services import goals as svc

router = APIRouter(prefix="/v1/goals", tags=["Goals"])

_errors = {400: {"model": ApiError}, 403: {"model": ApiError}, 404: {"model": ApiError}}


@router.get("", summary="List goals", description="Goals of the user ordered by priority (1 first).", response_model=GoalsResponse)
def list_goals(user_id: int = Depends(get_current_user_id)):
    goals = svc.list_goals(user_id)
    return {"goals": goals, "count": len(goals)}


@router.post("", status_code=201, summary="Create goal", description="At most 3 goals per user and one per goal type.", response_model=Goal, responses=_errors)
def create_goal(payload: GoalCreate, user_id: int = Depends(get_current_user_id)):
    return svc.create_goal(user_id, payload)


@router.put("/{goal_id}", summary="Update goal", response_model=Goal, responses=_errors)
def update_goal(goal_id: int, payload: GoalUpdate, user_id: int = Depends(get_current_user_id)):
    return svc.update_goal(user_id, goal_id, payload)


@router.delete("/{goal_id}", summary="Delete goal", response_model=MessageResponse, responses=_errors)
def delete_goal(goal_id: int, user_id: int = Depends(get_current_user_id)):
    svc.delete_goal(user_id, goal_id)
    return {"message": "Goal deleted successfully"}
