from fastapi import APIRouter, Depends

from finpath.api.common import ApiError
from finpath.api.deps import get_current_user_id
from finpath.core.errors import NotFoundError
from finpath.core.logging import logger
from finpath.db import users_repo
from finpath.schemas.profile import UserProfile

router = APIRouter(prefix="/v1/profile", tags=["Profile"])


@router.get("", summary="Current profile", response_model=UserProfile, responses={404: {"model": ApiError}})
def get_profile(user_id: int = Depends(get_current_user_id)):
    profile = users_repo.get_profile(user_id)
    if profile is None:
        raise NotFoundError("User not found", target="profile")
    return profile


@router.put("", summary="Create or replace profile", description="Stores the income and employment status used for roadmap generation.", response_model=UserProfile)
def put_profile(payload: UserProfile, user_id: int = Depends(get_current_user_id)):
    profile = users_repo.upsert_profile(user_id, payload)
    logger.info("profile_saved", user_id=user_id, employment_status=profile.employment_status.value)
    return profile
