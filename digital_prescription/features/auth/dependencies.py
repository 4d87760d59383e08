from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from digital_prescription.features.auth.models import User
from digital_prescription.features.auth.service import AuthService
from digital_prescription.core.security import decode_token
from digital_prescription.core.logging import logger
from digital_prescription.shared.exceptions import CredentialsException, ForbiddenException


# HTTP Bearer security scheme
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    """
    Dependency to get current authenticated user.

    Args:
        credentials: HTTP Bearer credentials

    Returns:
        User: Current authenticated user

    Raises:
        CredentialsException: If credentials are invalid
    """
    payload = decode_token(credentials.credentials)
    if payload is None:
        raise CredentialsException("Invalid authentication credentials")

    user_id: str = payload.get("sub")
    if user_id is None:
        raise CredentialsException("Invalid authentication credentials")

    user = await AuthService.get_user_by_id(user_id)
    if user is None:
        raise CredentialsException("User not found")

    if not user.is_active:
        raise CredentialsException("Inactive user")

    return user


async def get_current_doctor(current_user: User = Depends(get_current_user)) -> User:
    """Dependency that only lets doctors through."""
    if current_user.role != "DOCTOR":
        logger.warning(f"User {current_user.username} ({current_user.role}) attempted a doctor-only action")
        raise ForbiddenException("This endpoint requires a doctor account")
    return current_user


async def get_current_patient(current_user: User = Depends(get_current_user)) -> User:
    """Dependency that only lets patients through."""
    if current_user.role != "PATIENT":
        logger.warning(f"User {current_user.username} ({current_user.role}) attempted a patient-only action")
        raise ForbiddenException("This endpoint requires a patient account")
    return current_user
