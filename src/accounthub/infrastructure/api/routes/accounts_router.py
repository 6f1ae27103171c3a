"""Account API routes.

Provides endpoints for account management, balance changes and
authorized-user management.
"""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from accounthub.domain.services.account_service import AccountService
from accounthub.infrastructure.api.routes._views import account_response
from accounthub.infrastructure.api.schemas import (
    AccountResponse,
    AuthorizedUserRequest,
    CreateAccountRequest,
    ErrorResponse,
    MessageResponse,
    UpdateAccountRequest,
    UpdateBalanceRequest,
    ValidationErrorResponse,
)
from accounthub.infrastructure.persistence.database import get_db_session

router = APIRouter()

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=list[AccountResponse],
)
async def list_accounts(session: SessionDep) -> list[AccountResponse]:
    """List all accounts with their users."""
    accounts = await AccountService(session).list_accounts()
    return [account_response(account) for account in accounts]


@router.get(
    "/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=AccountResponse,
    responses={404: {"model": ErrorResponse, "description": "Account not found"}},
)
async def get_account(account_id: int, session: SessionDep) -> AccountResponse:
    """Get an account by ID."""
    account = await AccountService(session).get_account(account_id)
    return account_response(account)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AccountResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Primary user not found"},
        409: {"model": ErrorResponse, "description": "Account number already in use"},
    },
)
async def create_account(
    request: CreateAccountRequest, session: SessionDep
) -> AccountResponse:
    """Create an account owned by an existing user.

    The owner becomes the PRIMARY user of the account.
    """
    account = await AccountService(session).create_account(
        account_number=request.account_number,
        primary_user_id=request.primary_user_id,
        balance=request.balance,
    )
    await session.commit()
    return account_response(account)


@router.put(
    "/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=AccountResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Account not found"},
        409: {"model": ErrorResponse, "description": "Account number already in use"},
    },
)
async def update_account(
    account_id: int, request: UpdateAccountRequest, session: SessionDep
) -> AccountResponse:
    """Replace an account's number and balance."""
    account = await AccountService(session).update_account(
        account_id, request.account_number, request.balance
    )
    await session.commit()
    return account_response(account)


@router.patch(
    "/{account_id}/balance",
    status_code=status.HTTP_200_OK,
    response_model=AccountResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
)
async def update_balance(
    account_id: int, request: UpdateBalanceRequest, session: SessionDep
) -> AccountResponse:
    """Overwrite an account's balance."""
    account = await AccountService(session).update_balance(account_id, request.balance)
    await session.commit()
    return account_response(account)


@router.delete(
    "/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Account not found"},
        409: {"model": ErrorResponse, "description": "Balance is not zero"},
    },
)
async def delete_account(account_id: int, session: SessionDep) -> MessageResponse:
    """Delete an account with a zero balance, along with all its associations."""
    await AccountService(session).delete_account(account_id)
    await session.commit()
    return MessageResponse(
        message="Account deleted successfully",
        timestamp=datetime.now(timezone.utc),
    )


@router.post(
    "/{account_id}/authorized-users",
    status_code=status.HTTP_200_OK,
    response_model=AccountResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Account or user not found"},
        409: {"model": ErrorResponse, "description": "User already associated"},
    },
)
async def add_authorized_user(
    account_id: int, request: AuthorizedUserRequest, session: SessionDep
) -> AccountResponse:
    """Grant a user AUTHORIZED access to an account."""
    account = await AccountService(session).add_authorized_user(account_id, request.user_id)
    await session.commit()
    return account_response(account)


@router.delete(
    "/{account_id}/authorized-users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=AccountResponse,
    responses={404: {"model": ErrorResponse, "description": "Account not found"}},
)
async def remove_authorized_user(
    account_id: int, user_id: int, session: SessionDep
) -> AccountResponse:
    """Revoke a user's AUTHORIZED access.

    Succeeds without changes when the user is not authorized on the account.
    The PRIMARY user cannot be removed this way.
    """
    account = await AccountService(session).remove_authorized_user(account_id, user_id)
    await session.commit()
    return account_response(account)
