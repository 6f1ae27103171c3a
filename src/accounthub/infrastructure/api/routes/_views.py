"""Conversions from persistence models to response schemas."""

from accounthub.domain.entities.user_balance import UserBalance
from accounthub.domain.services.relationship_view import (
    build_account_summaries,
    order_for_account,
)
from accounthub.infrastructure.api.schemas import (
    AccountResponse,
    AccountUserResponse,
    UserAccountResponse,
    UserBalanceResponse,
    UserResponse,
)
from accounthub.infrastructure.persistence.models import AccountModel, UserModel


def user_response(user: UserModel) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        accounts=[
            UserAccountResponse(
                account_id=summary.account_id,
                account_number=summary.account_number,
                balance=summary.balance,
                role=summary.role,
            )
            for summary in build_account_summaries(user.account_users)
        ],
    )


def user_balance_response(balance: UserBalance) -> UserBalanceResponse:
    return UserBalanceResponse(
        user_id=balance.user_id,
        name=balance.name,
        email=balance.email,
        total_balance=balance.total_balance,
        accounts=[
            UserAccountResponse(
                account_id=summary.account_id,
                account_number=summary.account_number,
                balance=summary.balance,
                role=summary.role,
            )
            for summary in balance.accounts
        ],
    )


def account_response(account: AccountModel) -> AccountResponse:
    return AccountResponse(
        id=account.id,
        account_number=account.account_number,
        balance=account.balance,
        users=[
            AccountUserResponse(
                user_id=au.user.id,
                user_name=au.user.name,
                user_email=au.user.email,
                role=au.role,
            )
            for au in order_for_account(account.account_users)
        ],
    )
