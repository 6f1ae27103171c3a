"""User service for business logic.

Provides user management operations with the uniqueness and deletion rules
that apply to account holders.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from accounthub.core.logging import get_logger
from accounthub.domain.entities.user_balance import UserBalance
from accounthub.domain.exceptions import (
    UserAlreadyExistsError,
    UserHasAccountsError,
    UserNotFoundError,
)
from accounthub.domain.services.email_normalizer import normalize_email
from accounthub.domain.services.field_validator import FieldValidator, raise_for_errors
from accounthub.domain.services.relationship_view import (
    build_account_summaries,
    calculate_total_balance,
)
from accounthub.infrastructure.persistence.models import UserModel
from accounthub.infrastructure.persistence.repositories import (
    AccountUserRepository,
    UserRepository,
)

logger = get_logger(__name__)


class UserService:
    """Service for user management business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the user service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.account_user_repo = AccountUserRepository(session)

    async def list_users(self) -> list[UserModel]:
        return await self.user_repo.list_all()

    async def get_user(self, user_id: int) -> UserModel:
        """Get a user by ID.

        Raises:
            UserNotFoundError: If no user has this ID.
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def create_user(self, name: str, email: str) -> UserModel:
        """Create a new user.

        Args:
            name: Display name.
            email: Email address, stored normalized.

        Returns:
            Created user model.

        Raises:
            InvalidArgumentError: If a field is missing or malformed.
            UserAlreadyExistsError: If another user owns the normalized email.
        """
        raise_for_errors(
            FieldValidator.validate_name(name),
            FieldValidator.validate_email(email),
        )
        normalized = normalize_email(email)

        if await self.user_repo.email_exists(normalized):
            raise UserAlreadyExistsError(normalized)

        user = UserModel(name=name, email=normalized)
        try:
            user = await self.user_repo.create(user)
        except IntegrityError:
            await self.session.rollback()
            raise UserAlreadyExistsError(normalized) from None

        logger.info("User created", user_id=user.id, email=user.email)
        return user

    async def update_user(self, user_id: int, name: str, email: str) -> UserModel:
        """Replace a user's name and email.

        Raises:
            InvalidArgumentError: If a field is missing or malformed.
            UserNotFoundError: If no user has this ID.
            UserAlreadyExistsError: If the new email belongs to another user.
        """
        raise_for_errors(
            FieldValidator.validate_name(name),
            FieldValidator.validate_email(email),
        )

        user = await self.get_user(user_id)

        normalized = normalize_email(email)
        if normalized != user.email and await self.user_repo.email_exists(normalized):
            raise UserAlreadyExistsError(normalized)

        user.name = name
        user.email = normalized
        try:
            user = await self.user_repo.update(user)
        except IntegrityError:
            await self.session.rollback()
            raise UserAlreadyExistsError(normalized) from None

        logger.info("User updated", user_id=user.id)
        return user

    async def delete_user(self, user_id: int) -> None:
        """Delete a user that holds no account associations.

        Raises:
            UserNotFoundError: If no user has this ID.
            UserHasAccountsError: If the user is linked to any account.
        """
        user = await self.get_user(user_id)

        if await self.account_user_repo.count_accounts_by_user(user_id) > 0:
            raise UserHasAccountsError(user_id)

        await self.user_repo.delete(user)
        logger.info("User deleted", user_id=user_id)

    async def get_user_balance(self, user_id: int) -> UserBalance:
        """Summarize the balances of every account the user can access.

        Raises:
            UserNotFoundError: If no user has this ID.
        """
        user = await self.get_user(user_id)
        return UserBalance(
            user_id=user.id,
            name=user.name,
            email=user.email,
            accounts=build_account_summaries(user.account_users),
            total_balance=calculate_total_balance(user.account_users),
        )
