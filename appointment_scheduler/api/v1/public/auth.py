# ============================================================================
# FILE: appointment_scheduler/api/v1/public/auth.py
# Authentication endpoints - register, login, me, logout
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from appointment_scheduler.api.dependencies import (
    get_db,
    get_current_user,
    create_access_token,
)
from appointment_scheduler.models.user import User
from appointment_scheduler.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserResponse,
    MessageResponse,
)
from appointment_scheduler.services.user.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _token_response(user: User, message: str) -> TokenResponse:
    access_token = create_access_token(data={"sub": str(user.id), "role": user.role.value})
    return TokenResponse(
        message=message,
        access_token=access_token,
        user=UserResponse(**UserService.serialize_user(user))
    )


# ============================================================================
# Registration & Login Endpoints
# ============================================================================

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
        request: RegisterRequest,
        db: Session = Depends(get_db)
):
    """
    Register a new customer account.

    Returns an access token so the customer can book straight away.
    """
    user = UserService.create_user(
        db=db,
        name=request.name,
        email=request.email,
        password=request.password
    )
    return _token_response(user, "User registered successfully.")


@router.post("/login", response_model=TokenResponse)
async def login(
        request: LoginRequest,
        db: Session = Depends(get_db)
):
    """Login with email and password."""
    user = UserService.authenticate_user(db, request.email, request.password)

    if not user:
        logger.info(f"Failed login attempt for {request.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _token_response(user, "Logged in successfully.")


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the currently authenticated user."""
    return UserResponse(**UserService.serialize_user(current_user))


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """
    Tokens are stateless; the client discards its token.
    """
    return MessageResponse(message="Logged out successfully.")
