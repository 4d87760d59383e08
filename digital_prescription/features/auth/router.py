from fastapi import APIRouter, Depends, status
from digital_prescription.features.auth.schemas import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    UserResponse,
)
from digital_prescription.features.auth.service import AuthService
from digital_prescription.features.auth.dependencies import get_current_user
from digital_prescription.features.auth.models import User


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(register_data: RegisterRequest):
    """
    Register a new user.

    - **username**: Unique login name
    - **password**: At least 6 characters
    - **role**: DOCTOR or PATIENT
    - **specialization**: Required for doctors; used to route patient messages
    """
    user = await AuthService.register(register_data)
    return AuthService.user_to_response(user)


@router.post("/login", response_model=LoginResponse)
async def login(login_data: LoginRequest):
    """Authenticate user and return access token with the user's role."""
    user, access_token = await AuthService.login(login_data)

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        role=user.role,
        user=AuthService.user_to_response(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user."""
    return AuthService.user_to_response(current_user)
