"""SQLAlchemy models for AccountHub."""

from accounthub.infrastructure.persistence.models.account_user import AccountUserModel
from accounthub.infrastructure.persistence.models.user import UserModel
from accounthub.infrastructure.persistence.models.account import AccountModel

# Mapper events need the mapped classes above
from accounthub.infrastructure.persistence import event_listeners  # noqa: E402,F401

__all__ = [
    "AccountModel",
    "AccountUserModel",
    "UserModel",
]
