"""Persistence repositories for database operations."""

from accounthub.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from accounthub.infrastructure.persistence.repositories.account_user_repository import (
    AccountUserRepository,
)
from accounthub.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "AccountRepository",
    "AccountUserRepository",
    "UserRepository",
]
