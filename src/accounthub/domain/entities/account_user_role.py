"""Roles a user can hold on an account."""

from enum import Enum


class AccountUserRole(str, Enum):
    """Role of a user on an account.

    PRIMARY is the single owning role fixed when the account is created.
    AUTHORIZED users may be added and removed freely.
    """

    PRIMARY = "PRIMARY"
    AUTHORIZED = "AUTHORIZED"

    @property
    def sort_rank(self) -> int:
        """Rank used when presenting associations (PRIMARY first)."""
        return 0 if self is AccountUserRole.PRIMARY else 1
