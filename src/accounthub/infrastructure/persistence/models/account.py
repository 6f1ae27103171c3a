"""SQLAlchemy model for the accounts table.

An account holds a non-negative balance and is reachable by exactly one
PRIMARY user plus any number of AUTHORIZED users, all through
AccountUserModel associations.
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from accounthub.domain.entities.account_user_role import AccountUserRole
from accounthub.domain.services.field_validator import FieldValidator, raise_for_errors
from accounthub.infrastructure.persistence.database import Base
from accounthub.infrastructure.persistence.models.account_user import (
    AccountUserModel,
    collection_loaded,
)
from accounthub.infrastructure.persistence.types import CENT, Money


class AccountModel(Base):
    """SQLAlchemy model for the accounts table.

    Attributes:
        id: Primary key assigned by the database.
        account_number: Business identifier, unique across all accounts.
        balance: Exact decimal amount with two fractional digits.
        account_users: Associations linking this account to its users.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    account_number: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="Business identifier",
    )
    balance: Mapped[Decimal] = mapped_column(
        Money,
        nullable=False,
        default=Decimal("0.00"),
        comment="Current balance in cents, never negative",
    )

    # Relationships
    account_users: Mapped[list["AccountUserModel"]] = relationship(
        "AccountUserModel",
        back_populates="account",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="AccountUserModel.id",
    )

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    def __init__(
        self,
        account_number: str,
        primary_user: "UserModel",  # noqa: F821
        balance: Decimal | None = None,
        **kwargs,
    ) -> None:
        """Create an account together with its PRIMARY association.

        Args:
            account_number: Business identifier.
            primary_user: The user who owns the account.
            balance: Initial balance, 0.00 when omitted.
        """
        super().__init__(
            account_number=account_number,
            balance=Decimal("0.00") if balance is None else balance,
            **kwargs,
        )
        AccountUserModel(account=self, user=primary_user, role=AccountUserRole.PRIMARY)

    @validates("balance")
    def _validate_balance(self, key: str, balance: Decimal | None) -> Decimal:
        raise_for_errors(FieldValidator.validate_balance(balance))
        return Decimal(balance).quantize(CENT)

    @property
    def primary_user(self) -> "UserModel | None":  # noqa: F821
        """The user holding the PRIMARY role, if loaded."""
        for au in self.account_users:
            if au.role == AccountUserRole.PRIMARY:
                return au.user
        return None

    @property
    def authorized_users(self) -> list["UserModel"]:  # noqa: F821
        return [au.user for au in self.account_users if au.role == AccountUserRole.AUTHORIZED]

    def find_association(self, user_id: int) -> AccountUserModel | None:
        """Return this account's association with the given user, in any role."""
        for au in self.account_users:
            if au.user is not None and au.user.id == user_id:
                return au
        return None

    def add_authorized_user(self, user: "UserModel") -> AccountUserModel:  # noqa: F821
        """Grant a user AUTHORIZED access.

        The new association is visible from both the account and the user.
        Callers check for an existing association first.
        """
        return AccountUserModel(account=self, user=user, role=AccountUserRole.AUTHORIZED)

    def remove_authorized_user(self, user_id: int) -> list[AccountUserModel]:
        """Revoke a user's AUTHORIZED access.

        PRIMARY associations are never touched. Removing a user who is not
        authorized on this account is a no-op.

        Returns:
            The associations that were detached from both sides.
        """
        removed = [
            au
            for au in self.account_users
            if au.role == AccountUserRole.AUTHORIZED
            and au.user is not None
            and au.user.id == user_id
        ]
        for au in removed:
            au.unlink()
        return removed

    def release_associations(self) -> None:
        """Detach every association from its user before the account is deleted."""
        for au in list(self.account_users):
            user = au.user
            if user is not None and collection_loaded(user) and au in user.account_users:
                user.account_users.remove(au)

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, account_number={self.account_number})>"
