"""Auth API router: register, login, deactivate.

Registration also opens the user's (empty) custody account.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from config.settings import settings
from src.pm_common.response import ApiResponse, respond
from src.pm_engine.dependencies import get_engine
from src.pm_engine.engine import ExchangeEngine
from src.pm_gateway.auth.dependencies import get_current_user, get_user_service
from src.pm_gateway.user.models import User
from src.pm_gateway.user.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)
from src.pm_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="User registration",
)
async def register(
    request: Request,
    body: RegisterRequest,
    users: Annotated[UserService, Depends(get_user_service)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    user = users.register(body.username, body.email, body.password)
    account = engine.custody.open_account(user.id)

    data = RegisterResponse(
        **UserInfo.from_domain(user).model_dump(),
        available_balance=account.available_balance,
        created_at=user.created_at.isoformat(),
    )
    return respond(request, data.model_dump(), "User registered successfully")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="User login",
)
async def login(
    request: Request,
    body: LoginRequest,
    users: Annotated[UserService, Depends(get_user_service)],
) -> ApiResponse:
    user, access_token = users.login(body.username, body.password)

    data = LoginResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=UserInfo.from_domain(user),
    )
    return respond(request, data.model_dump(), "Login successful")


@router.post(
    "/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Deactivate own account",
)
async def deactivate(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> ApiResponse:
    """Further logins fail with 1004 and the account cannot receive position transfers."""
    users.deactivate(current_user.id)
    return respond(request, UserInfo.from_domain(current_user).model_dump(), "Account deactivated")
