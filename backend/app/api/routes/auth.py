"""Auth Routes — registration, login/logout and the caller's profile.

Invariants:
    - Register never logs the user in (the dashboard redirects to sign-in)
    - Login stores only the user id in the signed session cookie
    - Logout clears the whole session
"""

import logging

from fastapi import APIRouter, Request

from app.api.dependencies import CurrentUser, UserServiceDep
from app.schemas.auth import (
    IdentityOut,
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
)
from app.services.identity import SESSION_USER_KEY

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse)
async def register(body: RegisterRequest, users: UserServiceDep):
    """Create an account with the welcome token bonus."""
    user = await users.register(body)
    return RegisterResponse(
        message="User created successfully",
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, request: Request, users: UserServiceDep):
    user = await users.authenticate(body.email, body.password)
    request.session.clear()
    request.session[SESSION_USER_KEY] = str(user.id)
    logger.info("User logged in", extra={"user_id": user.id})
    return LoginResponse(
        message="Logged in successfully",
        user=UserPublic.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request):
    request.session.clear()
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
async def me(user: CurrentUser):
    """Profile data of the calling user."""
    return MeResponse(user=IdentityOut.model_validate(user))
