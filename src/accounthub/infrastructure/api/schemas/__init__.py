"""API Schemas for request/response validation."""

from accounthub.infrastructure.api.schemas.account_schemas import (
    AccountResponse,
    AccountUserResponse,
    AuthorizedUserRequest,
    CreateAccountRequest,
    UpdateAccountRequest,
    UpdateBalanceRequest,
)
from accounthub.infrastructure.api.schemas.common_schemas import (
    ErrorResponse,
    MessageResponse,
    ValidationErrorResponse,
)
from accounthub.infrastructure.api.schemas.metrics_schemas import AccountMetricsResponse
from accounthub.infrastructure.api.schemas.user_schemas import (
    UserAccountResponse,
    UserBalanceResponse,
    UserRequest,
    UserResponse,
)

__all__ = [
    "AccountMetricsResponse",
    "AccountResponse",
    "AccountUserResponse",
    "AuthorizedUserRequest",
    "CreateAccountRequest",
    "ErrorResponse",
    "MessageResponse",
    "UpdateAccountRequest",
    "UpdateBalanceRequest",
    "UserAccountResponse",
    "UserBalanceResponse",
    "UserRequest",
    "UserResponse",
    "ValidationErrorResponse",
]
