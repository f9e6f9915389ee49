"""
Profile & User Routes

GET /profile/status - Whether the caller has filled in skills and interests
PUT /profile/{user_id} - Update own profile
GET /users/find-by-email - Look up an account by email
GET /users/{account_id} - Public summary of an account
"""

from fastapi import APIRouter, Depends, Query

from placement_hub.core.auth import Identity, get_current_user
from placement_hub.services.account_service import AccountService, account_summary
from placement_hub.schemas.schemas import (
    ProfileUpdate, ProfileStatusResponse, AccountResponse, AccountSummaryResponse
)

router = APIRouter(tags=["Profiles"])


@router.get("/profile/status", response_model=ProfileStatusResponse)
async def profile_status(user: Identity = Depends(get_current_user)):
    return ProfileStatusResponse(**AccountService().profile_status(user.id))


@router.put("/profile/{user_id}", response_model=AccountResponse)
async def update_profile(user_id: str, data: ProfileUpdate, user: Identity = Depends(get_current_user)):
    """Update profile fields. Only the profile's owner may do this; email and role are fixed."""
    account = AccountService().update_profile(user, user_id, data.model_dump(exclude_unset=True, mode="json"))
    return AccountResponse(message="Profile updated successfully", user=account)


@router.get("/users/find-by-email", response_model=AccountSummaryResponse)
async def find_by_email(email: str = Query(..., min_length=3), user: Identity = Depends(get_current_user)):
    account = AccountService().find_by_email(email)
    return AccountSummaryResponse(user=account_summary(account))


@router.get("/users/{account_id}", response_model=AccountSummaryResponse)
async def get_user(account_id: str, user: Identity = Depends(get_current_user)):
    account = AccountService().get(account_id)
    return AccountSummaryResponse(user=account_summary(account))
