from typing import Optional
from beanie import PydanticObjectId
from bson.errors import InvalidId
from digital_prescription.features.auth.models import User
from digital_prescription.features.auth.schemas import RegisterRequest, LoginRequest, UserResponse
from digital_prescription.core.security import (
    verify_password,
    get_password_hash,
    create_user_token,
)
from digital_prescription.shared.exceptions import (
    CredentialsException,
    ConflictException,
    NotFoundException,
)
from digital_prescription.core.logging import logger


class AuthService:
    """Authentication service for handling auth business logic."""

    @staticmethod
    def user_to_response(user: User) -> UserResponse:
        """Convert User document to response schema."""
        return UserResponse(
            id=str(user.id),
            username=user.username,
            email=user.email,
            role=user.role,
            specialization=user.specialization,
            is_active=user.is_active,
            created_at=user.created_at,
        )

    @staticmethod
    async def register(register_data: RegisterRequest) -> User:
        """Register a new doctor or patient."""
        existing_user = await User.find_one(User.username == register_data.username)
        if existing_user:
            raise ConflictException("Username already registered")

        user = User(
            username=register_data.username,
            email=register_data.email,
            password_hash=get_password_hash(register_data.password),
            role=register_data.role,
            specialization=register_data.specialization.strip() if register_data.specialization else None,
        )
        await user.insert()

        logger.info(f"Registered {user.role} {user.username}")
        return user

    @staticmethod
    async def login(login_data: LoginRequest) -> tuple[User, str]:
        """
        Authenticate user and return access token.

        Returns:
            tuple: (user, access_token)
        """
        user = await User.find_one(User.username == login_data.username)
        if not user:
            raise CredentialsException("Invalid username or password")

        if not verify_password(login_data.password, user.password_hash):
            raise CredentialsException("Invalid username or password")

        if not user.is_active:
            raise CredentialsException("Account is inactive")

        access_token = create_user_token(str(user.id), user.username, user.role)

        return user, access_token

    @staticmethod
    async def get_user_by_id(user_id: str) -> Optional[User]:
        """Get a user by id, or None for unknown or malformed ids."""
        try:
            return await User.get(PydanticObjectId(user_id))
        except (InvalidId, TypeError):
            return None

    @staticmethod
    async def get_patient(patient_id: str) -> User:
        """
        Get a patient by id.

        Raises:
            NotFoundException: If no patient has this id
        """
        user = await AuthService.get_user_by_id(patient_id)
        if user is None or user.role != "PATIENT":
            raise NotFoundException("Patient not found")
        return user
