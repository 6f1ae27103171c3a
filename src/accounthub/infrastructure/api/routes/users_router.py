"""User API routes.

Provides endpoints for user management and per-user balance summaries.
"""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from accounthub.domain.services.user_service import UserService
from accounthub.infrastructure.api.routes._views import user_balance_response, user_response
from accounthub.infrastructure.api.schemas import (
    ErrorResponse,
    MessageResponse,
    UserBalanceResponse,
    UserRequest,
    UserResponse,
    ValidationErrorResponse,
)
from accounthub.infrastructure.persistence.database import get_db_session

router = APIRouter()

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=list[UserResponse],
)
async def list_users(session: SessionDep) -> list[UserResponse]:
    """List all users with their accounts."""
    users = await UserService(session).list_users()
    return [user_response(user) for user in users]


@router.get(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(user_id: int, session: SessionDep) -> UserResponse:
    """Get a user by ID."""
    user = await UserService(session).get_user(user_id)
    return user_response(user)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        409: {"model": ErrorResponse, "description": "Email already in use"},
    },
)
async def create_user(request: UserRequest, session: SessionDep) -> UserResponse:
    """Create a new user.

    The email is stored trimmed and lower-cased, and must be unique under
    that form.
    """
    user = await UserService(session).create_user(request.name, request.email)
    await session.commit()
    return user_response(user)


@router.put(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Email already in use"},
    },
)
async def update_user(
    user_id: int, request: UserRequest, session: SessionDep
) -> UserResponse:
    """Replace a user's name and email."""
    user = await UserService(session).update_user(user_id, request.name, request.email)
    await session.commit()
    return user_response(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "User still has accounts"},
    },
)
async def delete_user(user_id: int, session: SessionDep) -> MessageResponse:
    """Delete a user that has no associated accounts."""
    await UserService(session).delete_user(user_id)
    await session.commit()
    return MessageResponse(
        message="User deleted successfully",
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/{user_id}/balance",
    status_code=status.HTTP_200_OK,
    response_model=UserBalanceResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user_balance(user_id: int, session: SessionDep) -> UserBalanceResponse:
    """Get the total balance across every account the user can access."""
    balance = await UserService(session).get_user_balance(user_id)
    return user_balance_response(balance)
