"""Pydantic schemas for account endpoints."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from accounthub.domain.entities.account_user_role import AccountUserRole
from accounthub.domain.services.field_validator import (
    PRIMARY_USER_ID_REQUIRED,
    USER_ID_REQUIRED,
    FieldValidator,
    first_error_message,
)


def _check(errors) -> None:
    message = first_error_message(errors)
    if message:
        raise ValueError(message)


class CreateAccountRequest(BaseModel):
    """Request body for creating an account."""

    model_config = ConfigDict(validate_default=True)

    account_number: str | None = Field(None, max_length=64, description="Account number")
    primary_user_id: int | None = Field(None, description="ID of the owning user")
    balance: Decimal | None = Field(None, description="Initial balance, 0.00 if omitted")

    @field_validator("account_number")
    @classmethod
    def validate_account_number(cls, v: str | None) -> str | None:
        _check(FieldValidator.validate_account_number(v))
        return v

    @field_validator("primary_user_id")
    @classmethod
    def validate_primary_user_id(cls, v: int | None) -> int | None:
        _check(
            FieldValidator.validate_required_id(v, "primary_user_id", PRIMARY_USER_ID_REQUIRED)
        )
        return v

    @field_validator("balance")
    @classmethod
    def validate_balance(cls, v: Decimal | None) -> Decimal | None:
        _check(FieldValidator.validate_balance(v, required=False))
        return v


class UpdateAccountRequest(BaseModel):
    """Request body for replacing an account's number and balance."""

    model_config = ConfigDict(validate_default=True)

    account_number: str | None = Field(None, max_length=64, description="Account number")
    balance: Decimal | None = Field(None, description="New balance")

    @field_validator("account_number")
    @classmethod
    def validate_account_number(cls, v: str | None) -> str | None:
        _check(FieldValidator.validate_account_number(v))
        return v

    @field_validator("balance")
    @classmethod
    def validate_balance(cls, v: Decimal | None) -> Decimal | None:
        _check(FieldValidator.validate_balance(v))
        return v


class UpdateBalanceRequest(BaseModel):
    """Request body for overwriting an account's balance."""

    model_config = ConfigDict(validate_default=True)

    balance: Decimal | None = Field(None, description="New balance")

    @field_validator("balance")
    @classmethod
    def validate_balance(cls, v: Decimal | None) -> Decimal | None:
        _check(FieldValidator.validate_balance(v))
        return v


class AuthorizedUserRequest(BaseModel):
    """Request body for granting a user AUTHORIZED access."""

    model_config = ConfigDict(validate_default=True)

    user_id: int | None = Field(None, description="ID of the user to authorize")

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: int | None) -> int | None:
        _check(FieldValidator.validate_required_id(v, "user_id", USER_ID_REQUIRED))
        return v


class AccountUserResponse(BaseModel):
    """A user as seen from one of their accounts."""

    user_id: int = Field(..., description="User ID")
    user_name: str = Field(..., description="User display name")
    user_email: str = Field(..., description="User email address")
    role: AccountUserRole = Field(..., description="The user's role on the account")


class AccountResponse(BaseModel):
    """Account with its users, PRIMARY first, then by user ID."""

    id: int = Field(..., description="Account ID")
    account_number: str = Field(..., description="Account number")
    balance: Decimal = Field(..., description="Current balance")
    users: list[AccountUserResponse] = Field(
        default_factory=list, description="Users with access to the account"
    )
