"""SQLAlchemy model for the account_users association table.

One row links one account and one user with a role. The same instance is
held in both the account's and the user's ``account_users`` collections, so
there is exactly one record per (account, user) pair.
"""

from sqlalchemy import Enum, ForeignKey, Integer, UniqueConstraint, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accounthub.domain.entities.account_user_role import AccountUserRole
from accounthub.infrastructure.persistence.database import Base


def collection_loaded(owner: object, key: str = "account_users") -> bool:
    """Whether a relationship collection is already present in memory."""
    return key not in inspect(owner).unloaded


class AccountUserModel(Base):
    """Association between an account and a user.

    Attributes:
        id: Primary key assigned by the database.
        account_id: Foreign key to accounts table.
        user_id: Foreign key to users table.
        role: PRIMARY or AUTHORIZED.
    """

    __tablename__ = "account_users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to accounts table",
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to users table",
    )
    role: Mapped[AccountUserRole] = mapped_column(
        Enum(AccountUserRole, name="account_user_role", native_enum=False, length=16),
        nullable=False,
        comment="PRIMARY or AUTHORIZED",
    )

    # Relationships
    account: Mapped["AccountModel"] = relationship(  # noqa: F821
        "AccountModel",
        back_populates="account_users",
        lazy="selectin",
    )
    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="account_users",
        lazy="selectin",
    )

    __table_args__ = (
        # A user holds at most one role per account
        UniqueConstraint("account_id", "user_id", name="uq_account_users_account_user"),
    )

    @property
    def pair_key(self) -> tuple[int | None, int | None]:
        """The (account id, user id) pair that identifies this association."""
        account_id = self.account.id if self.account is not None else self.account_id
        user_id = self.user.id if self.user is not None else self.user_id
        return account_id, user_id

    def unlink(self) -> None:
        """Remove this association from both owners' collections."""
        account, user = self.account, self.user
        if account is not None and collection_loaded(account) and self in account.account_users:
            account.account_users.remove(self)
        if user is not None and collection_loaded(user) and self in user.account_users:
            user.account_users.remove(self)

    def __repr__(self) -> str:
        return (
            f"<AccountUser(account_id={self.account_id}, user_id={self.user_id}, "
            f"role={self.role})>"
        )
