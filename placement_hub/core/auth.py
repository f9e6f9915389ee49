"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies resolving the caller's Identity once per request
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from bson import ObjectId
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from placement_hub.core.config import get_settings
from placement_hub.core.errors import Forbidden, Unauthenticated
from placement_hub.db.mongodb import get_collection

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)

# Bearer token extractor; missing headers are reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Who is calling: account id, public handle, role and display name."""

    id: str
    user_id: str
    role: str
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_token_for_account(account: dict) -> str:
    return create_access_token(data={
        "sub": str(account["_id"]),
        "user_id": account["user_id"],
        "role": account["role"],
        "name": account["name"],
    })


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Identity:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: Identity = Depends(get_current_user)):
            return user
    """
    if credentials is None:
        raise Unauthenticated("Access denied. No token provided.")

    payload = decode_token(credentials.credentials)
    if not payload:
        raise Unauthenticated()

    account_id = payload.get("sub")
    if not account_id or not ObjectId.is_valid(account_id):
        raise Unauthenticated()

    # Verify account still exists; role and handle come from the stored record
    account = get_collection("accounts").find_one(
        {"_id": ObjectId(account_id)},
        {"user_id": 1, "role": 1, "name": 1}
    )
    if not account:
        raise Unauthenticated()

    return Identity(
        id=str(account["_id"]),
        user_id=account["user_id"],
        role=account["role"],
        name=account["name"],
    )


async def get_current_student(user: Identity = Depends(get_current_user)) -> Identity:
    """Dependency - Require student role."""
    if user.role != "student":
        raise Forbidden("Students only")
    return user


async def get_current_recruiter(user: Identity = Depends(get_current_user)) -> Identity:
    """Dependency - Require recruiter role."""
    if user.role != "recruiter":
        raise Forbidden("Recruiters only")
    return user
