"""REST API endpoints for user profiles and onboarding."""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import BaseModel, Field

from scanmyfood.api.dependencies import get_user_repository
from scanmyfood.domain.user.entities import User
from scanmyfood.domain.user.errors import UserNotFoundError
from scanmyfood.domain.user.ports import IUserRepository

router = APIRouter(prefix="/api/v1/users", tags=["users"])

Uid = Annotated[str, Path(min_length=1, max_length=255, description="Auth provider uid")]


class CreateUserInput(BaseModel):
    uid: str = Field(..., min_length=1, max_length=255)
    email: str
    display_name: str


class PreferencesInput(BaseModel):
    dietary_preference: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)


class HealthMetricsInput(BaseModel):
    height_feet: int
    height_inches: int
    weight_kg: float
    goal: str


class UserResponse(BaseModel):
    """User profile as returned by the API."""

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    onboarding_complete: bool
    dietary_preference: Optional[str] = None
    country: Optional[str] = None
    height_feet: Optional[int] = None
    height_inches: Optional[int] = None
    weight_kg: Optional[float] = None
    goal: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_entity(user: User) -> "UserResponse":
        return UserResponse(**user.to_dict())


class IsNewUserResponse(BaseModel):
    uid: str
    is_new: bool


class OnboardingStatusResponse(BaseModel):
    uid: str
    onboarding_complete: bool


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: CreateUserInput,
    repository: IUserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Create the profile for a freshly signed-in user."""
    user = await repository.create_user(body.uid, body.email, body.display_name)
    return UserResponse.from_entity(user)


@router.get("/{uid}", response_model=UserResponse)
async def get_user(
    uid: Uid,
    repository: IUserRepository = Depends(get_user_repository),
) -> UserResponse:
    user = await repository.find_by_uid(uid)
    if user is None:
        raise UserNotFoundError(uid)
    return UserResponse.from_entity(user)


@router.get("/{uid}/is-new", response_model=IsNewUserResponse)
async def is_new_user(
    uid: Uid,
    repository: IUserRepository = Depends(get_user_repository),
) -> IsNewUserResponse:
    return IsNewUserResponse(uid=uid, is_new=await repository.is_new_user(uid))


@router.post("/{uid}/onboarding/complete", status_code=status.HTTP_204_NO_CONTENT)
async def mark_onboarding_complete(
    uid: Uid,
    repository: IUserRepository = Depends(get_user_repository),
) -> Response:
    await repository.mark_onboarding_complete(uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{uid}/onboarding", response_model=OnboardingStatusResponse)
async def get_onboarding_status(
    uid: Uid,
    repository: IUserRepository = Depends(get_user_repository),
) -> OnboardingStatusResponse:
    complete = await repository.is_onboarding_complete(uid)
    return OnboardingStatusResponse(uid=uid, onboarding_complete=complete)


@router.put("/{uid}/preferences", status_code=status.HTTP_204_NO_CONTENT)
async def save_preferences(
    body: PreferencesInput,
    uid: Uid,
    repository: IUserRepository = Depends(get_user_repository),
) -> Response:
    await repository.save_user_preferences(uid, body.dietary_preference, body.country)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{uid}/health-metrics", status_code=status.HTTP_204_NO_CONTENT)
async def save_health_metrics(
    body: HealthMetricsInput,
    uid: Uid,
    repository: IUserRepository = Depends(get_user_repository),
) -> Response:
    await repository.save_health_metrics(
        uid,
        height_feet=body.height_feet,
        height_inches=body.height_inches,
        weight_kg=body.weight_kg,
        goal=body.goal,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
