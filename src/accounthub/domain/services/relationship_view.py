"""Deterministic views over a snapshot of account-user associations.

These functions are pure: they read the associations they are given and
never touch storage or cache anything on the entities. The same ordering
rule is used from both sides of the association:

- PRIMARY associations come before AUTHORIZED ones.
- Within a role, associations are sorted by the identity of the *other*
  entity (the user when viewed from an account, the account when viewed
  from a user).
"""

from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

from accounthub.domain.entities.user_balance import AccountSummary

if TYPE_CHECKING:
    from accounthub.infrastructure.persistence.models import AccountUserModel

ZERO_BALANCE = Decimal("0.00")


def _order(
    associations: Iterable["AccountUserModel"] | None,
    other_id: Callable[["AccountUserModel"], int],
) -> list["AccountUserModel"]:
    if not associations:
        return []
    return sorted(associations, key=lambda au: (au.role.sort_rank, other_id(au)))


def order_for_account(
    associations: Iterable["AccountUserModel"] | None,
) -> list["AccountUserModel"]:
    """Order an account's associations: PRIMARY first, then by user id."""
    return _order(associations, lambda au: au.user.id)


def order_for_user(
    associations: Iterable["AccountUserModel"] | None,
) -> list["AccountUserModel"]:
    """Order a user's associations: PRIMARY first, then by account id."""
    return _order(associations, lambda au: au.account.id)


def calculate_total_balance(associations: Iterable["AccountUserModel"] | None) -> Decimal:
    """Sum the balance of every associated account, whatever the role.

    Returns:
        The exact decimal total; ``Decimal("0.00")`` for no associations.
    """
    if not associations:
        return ZERO_BALANCE
    return sum((au.account.balance for au in associations), ZERO_BALANCE)


def build_account_summaries(
    associations: Iterable["AccountUserModel"] | None,
) -> list[AccountSummary]:
    """Build the ordered per-account summaries shown in a user's balance view."""
    return [
        AccountSummary(
            account_id=au.account.id,
            account_number=au.account.account_number,
            balance=au.account.balance,
            role=au.role,
        )
        for au in order_for_user(associations)
    ]
