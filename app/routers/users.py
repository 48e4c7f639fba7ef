"""
Users router - profile read and update endpoints.
"""

from fastapi import APIRouter, Depends

from app.deps import get_identity_service
from app.schemas.user import (
    MessageResponse,
    PasswordChange,
    ProfileResponse,
    ProfileUpdate,
    UserOut,
)
from app.services.identity_service import IdentityService

router = APIRouter(prefix="/users", tags=["users"])


@router.patch("/{user_id}/profile", response_model=ProfileResponse)
async def update_profile(
    user_id: str,
    payload: ProfileUpdate,
    identity: IdentityService = Depends(get_identity_service),
):
    """
    Update name, company and/or avatar_url.

    Only fields present in the body are written; other keys are ignored.
    An empty body is a 400.
    """
    user = await identity.update_profile(user_id, payload.model_dump(exclude_unset=True))
    return ProfileResponse(user=user)


@router.patch("/{user_id}/password", response_model=MessageResponse)
async def change_password(
    user_id: str,
    payload: PasswordChange,
    identity: IdentityService = Depends(get_identity_service),
):
    """Replace the user's password (minimum 6 characters)."""
    await identity.change_password(user_id, payload.password)
    return MessageResponse(message="Password updated successfully")


@router.get("/{user_id}", response_model=UserOut)
async def read_user(
    user_id: str,
    identity: IdentityService = Depends(get_identity_service),
):
    """Fetch a user's public profile. 404 if the id is unknown."""
    return await identity.get_profile(user_id)
