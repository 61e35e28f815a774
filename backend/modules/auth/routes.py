"""
Auth API endpoints.

Registration and login are public; everything else needs a bearer token.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from api.models.envelope import ApiResponse
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    EmailVerificationConfirm,
    EmailVerificationIssued,
    EmailVerificationRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserSummary,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[RegisterResponse],
    response_model_exclude_none=True,
    status_code=201,
)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[RegisterResponse]:
    """Create an account. Usernames are case-insensitive and stored lowercase."""
    user = await service.register(request)
    return ApiResponse[RegisterResponse](
        message="Registration successful",
        data=RegisterResponse(user_id=user.id, username=user.username),
    )


@router.post("/login", response_model=ApiResponse[LoginResponse], response_model_exclude_none=True)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[LoginResponse]:
    """Exchange username and password for a bearer token."""
    result = await service.login(request)
    return ApiResponse[LoginResponse](message="Login successful", data=result)


@router.get("/me", response_model=ApiResponse[UserSummary], response_model_exclude_none=True)
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
) -> ApiResponse[UserSummary]:
    """Get the current user's profile."""
    return ApiResponse[UserSummary](
        message="User retrieved successfully",
        data=UserSummary(
            id=user.id,
            username=user.username,
            email=user.email,
            is_email_verified=user.email_verified,
        ),
    )


@router.post(
    "/email/verify/request",
    response_model=ApiResponse[EmailVerificationIssued],
    response_model_exclude_none=True,
)
async def request_email_verification(
    request: EmailVerificationRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[EmailVerificationIssued]:
    """Attach an email address and issue a verification code for it."""
    issued = await service.request_email_verification(user.id, request.email)
    return ApiResponse[EmailVerificationIssued](
        message="Verification code sent",
        data=issued,
    )


@router.post(
    "/email/verify/confirm",
    response_model=ApiResponse[UserSummary],
    response_model_exclude_none=True,
)
async def confirm_email_verification(
    request: EmailVerificationConfirm,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse[UserSummary]:
    """Confirm the pending email address with its code."""
    record = await service.confirm_email_verification(user.id, request.otp)
    return ApiResponse[UserSummary](
        message="Email verified successfully",
        data=UserSummary.from_record(record),
    )
