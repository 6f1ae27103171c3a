"""Read models describing a user's aggregate balance."""

from dataclasses import dataclass, field
from decimal import Decimal

from accounthub.domain.entities.account_user_role import AccountUserRole


@dataclass(frozen=True)
class AccountSummary:
    """One account as seen from a user's side of the association.

    Attributes:
        account_id: Identity of the account.
        account_number: Human-facing account number.
        balance: Current balance of the account.
        role: Role the user holds on the account.
    """

    account_id: int
    account_number: str
    balance: Decimal
    role: AccountUserRole


@dataclass(frozen=True)
class UserBalance:
    """A user with the accounts they can access and the summed balance.

    Attributes:
        user_id: Identity of the user.
        name: Display name.
        email: Normalized email address.
        accounts: Account summaries, PRIMARY first then by account id.
        total_balance: Sum of every listed account's balance.
    """

    user_id: int
    name: str
    email: str
    accounts: list[AccountSummary] = field(default_factory=list)
    total_balance: Decimal = Decimal("0.00")
