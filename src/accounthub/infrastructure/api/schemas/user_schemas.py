"""Pydantic schemas for user endpoints."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from accounthub.domain.entities.account_user_role import AccountUserRole
from accounthub.domain.services.field_validator import FieldValidator, first_error_message


class UserRequest(BaseModel):
    """Request body for creating or replacing a user.

    Fields are optional at the type level so that a missing value reports the
    same message as an empty one.
    """

    model_config = ConfigDict(validate_default=True)

    name: str | None = Field(None, max_length=255, description="Display name")
    email: str | None = Field(None, max_length=255, description="Email address")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        message = first_error_message(FieldValidator.validate_name(v))
        if message:
            raise ValueError(message)
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        message = first_error_message(FieldValidator.validate_email(v))
        if message:
            raise ValueError(message)
        return v


class UserAccountResponse(BaseModel):
    """An account as seen from one of its users."""

    account_id: int = Field(..., description="Account ID")
    account_number: str = Field(..., description="Account number")
    balance: Decimal = Field(..., description="Account balance")
    role: AccountUserRole = Field(..., description="The user's role on the account")


class UserResponse(BaseModel):
    """User with the accounts they can access.

    Accounts are listed PRIMARY first, then by account ID.
    """

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Normalized email address")
    accounts: list[UserAccountResponse] = Field(
        default_factory=list, description="Associated accounts"
    )


class UserBalanceResponse(BaseModel):
    """Total balance across every account a user can access."""

    user_id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Normalized email address")
    total_balance: Decimal = Field(..., description="Sum of all account balances")
    accounts: list[UserAccountResponse] = Field(
        default_factory=list, description="Accounts included in the total"
    )

    model_config = {"from_attributes": True}
