"""SQLAlchemy model for the users table.

Users are account holders. Their email is unique across the system under its
normalized (trimmed, lower-cased) form.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from accounthub.domain.services.email_normalizer import normalize_email
from accounthub.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key assigned by the database.
        name: Display name.
        email: Normalized email address, unique across all users.
        account_users: Associations linking this user to accounts.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Normalized email address",
    )

    # Relationships
    account_users: Mapped[list["AccountUserModel"]] = relationship(  # noqa: F821
        "AccountUserModel",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="AccountUserModel.id",
    )

    def __init__(self, **kwargs) -> None:
        # A new user starts with a loaded, empty collection so that reading it
        # after flush does not lazy load.
        kwargs.setdefault("account_users", [])
        super().__init__(**kwargs)

    @validates("email")
    def _normalize_email(self, key: str, email: str | None) -> str | None:
        return normalize_email(email)

    @property
    def accounts(self) -> list["AccountModel"]:  # noqa: F821
        """Accounts this user can access, in any role."""
        return [au.account for au in self.account_users]

    @property
    def has_accounts(self) -> bool:
        return bool(self.account_users)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
