"""
Authentication Routes

POST /auth/register - Register new account
POST /auth/login - Login and get JWT token
GET /auth/profile - Get current account
"""

from fastapi import APIRouter, Depends

from placement_hub.core.auth import Identity, create_token_for_account, get_current_user
from placement_hub.services.account_service import AccountService, account_summary, public_account
from placement_hub.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, RegisterResponse, AccountResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new account.

    Students must use their institutional email address; recruiters and
    admins must use any other domain.
    """
    account = AccountService().register(
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role.value,
    )
    return RegisterResponse(message="User registered successfully", user_id=account["user_id"])


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    account = AccountService().authenticate(request.email, request.password)
    return TokenResponse(
        message="Login successful",
        token=create_token_for_account(account),
        user=account_summary(account),
    )


@router.get("/profile", response_model=AccountResponse)
async def get_me(user: Identity = Depends(get_current_user)):
    """Get current authenticated account's info."""
    account = AccountService().get(user.id)
    return AccountResponse(user=public_account(account))
