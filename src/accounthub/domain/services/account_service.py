"""Account service for business logic.

Provides account management operations: creation with a primary user,
balance changes, deletion rules, and authorized-user management.
"""

from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from accounthub.core.logging import get_logger
from accounthub.domain.exceptions import (
    AccountAlreadyExistsError,
    AccountBalanceNotZeroError,
    AccountNotFoundError,
    UserAlreadyAssociatedError,
    UserNotFoundError,
)
from accounthub.domain.entities.account_user_role import AccountUserRole
from accounthub.domain.services.field_validator import (
    PRIMARY_USER_ID_REQUIRED,
    USER_ID_REQUIRED,
    FieldValidator,
    raise_for_errors,
)
from accounthub.infrastructure.persistence.models import AccountModel
from accounthub.infrastructure.persistence.repositories import (
    AccountRepository,
    AccountUserRepository,
    UserRepository,
)

logger = get_logger(__name__)


class AccountService:
    """Service for account management business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the account service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.account_repo = AccountRepository(session)
        self.user_repo = UserRepository(session)
        self.account_user_repo = AccountUserRepository(session)

    async def list_accounts(self) -> list[AccountModel]:
        return await self.account_repo.list_all()

    async def get_account(self, account_id: int) -> AccountModel:
        """Get an account by ID.

        Raises:
            AccountNotFoundError: If no account has this ID.
        """
        account = await self.account_repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def create_account(
        self,
        account_number: str,
        primary_user_id: int,
        balance: Decimal | None = None,
    ) -> AccountModel:
        """Create a new account owned by an existing user.

        Args:
            account_number: Business identifier, unique across accounts.
            primary_user_id: ID of the user who becomes PRIMARY.
            balance: Initial balance, 0.00 when omitted.

        Returns:
            Created account model with its PRIMARY association.

        Raises:
            InvalidArgumentError: If a field is missing or malformed.
            AccountAlreadyExistsError: If the account number is taken.
            UserNotFoundError: If the primary user does not exist.
        """
        raise_for_errors(
            FieldValidator.validate_account_number(account_number),
            FieldValidator.validate_required_id(
                primary_user_id, "primary_user_id", PRIMARY_USER_ID_REQUIRED
            ),
            FieldValidator.validate_balance(balance, required=False),
        )

        if await self.account_repo.account_number_exists(account_number):
            raise AccountAlreadyExistsError(account_number)

        primary_user = await self.user_repo.get_by_id(primary_user_id)
        if primary_user is None:
            raise UserNotFoundError(primary_user_id)

        account = AccountModel(
            account_number=account_number,
            primary_user=primary_user,
            balance=balance,
        )
        try:
            account = await self.account_repo.create(account)
        except IntegrityError:
            await self.session.rollback()
            raise AccountAlreadyExistsError(account_number) from None

        logger.info(
            "Account created",
            account_id=account.id,
            account_number=account.account_number,
            primary_user_id=primary_user_id,
        )
        return account

    async def update_account(
        self, account_id: int, account_number: str, balance: Decimal
    ) -> AccountModel:
        """Replace an account's number and balance.

        Raises:
            InvalidArgumentError: If a field is missing or malformed.
            AccountNotFoundError: If no account has this ID.
            AccountAlreadyExistsError: If the new number belongs to another account.
        """
        raise_for_errors(
            FieldValidator.validate_account_number(account_number),
            FieldValidator.validate_balance(balance),
        )

        account = await self.get_account(account_id)

        if (
            account_number != account.account_number
            and await self.account_repo.account_number_exists(account_number)
        ):
            raise AccountAlreadyExistsError(account_number)

        account.account_number = account_number
        account.balance = balance
        try:
            account = await self.account_repo.update(account)
        except IntegrityError:
            await self.session.rollback()
            raise AccountAlreadyExistsError(account_number) from None

        logger.info("Account updated", account_id=account.id)
        return account

    async def update_balance(self, account_id: int, balance: Decimal) -> AccountModel:
        """Overwrite an account's balance.

        Raises:
            InvalidArgumentError: If the balance is missing, negative, too large or
                too precise.
            AccountNotFoundError: If no account has this ID.
        """
        raise_for_errors(FieldValidator.validate_balance(balance))

        account = await self.get_account(account_id)
        account.balance = balance
        account = await self.account_repo.update(account)

        logger.info("Account balance updated", account_id=account.id, balance=str(account.balance))
        return account

    async def delete_account(self, account_id: int) -> None:
        """Delete an account whose balance is exactly zero.

        Raises:
            AccountNotFoundError: If no account has this ID.
            AccountBalanceNotZeroError: If the balance is not zero.
        """
        account = await self.get_account(account_id)

        if account.balance != Decimal("0"):
            raise AccountBalanceNotZeroError(account_id)

        await self.account_repo.delete(account)
        logger.info("Account deleted", account_id=account_id)

    async def add_authorized_user(self, account_id: int, user_id: int) -> AccountModel:
        """Grant a user AUTHORIZED access to an account.

        Returns:
            The account, including the new association.

        Raises:
            InvalidArgumentError: If the user ID is missing.
            UserAlreadyAssociatedError: If the user already has any role on the account.
            AccountNotFoundError: If no account has this ID.
            UserNotFoundError: If no user has this ID.
        """
        raise_for_errors(
            FieldValidator.validate_required_id(user_id, "user_id", USER_ID_REQUIRED)
        )

        if await self.account_user_repo.get_by_account_and_user(account_id, user_id):
            raise UserAlreadyAssociatedError(account_id, user_id)

        account = await self.get_account(account_id)
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        try:
            await self.account_user_repo.create(account, user, AccountUserRole.AUTHORIZED)
        except IntegrityError:
            await self.session.rollback()
            raise UserAlreadyAssociatedError(account_id, user_id) from None

        logger.info("Authorized user added", account_id=account_id, user_id=user_id)
        return account

    async def remove_authorized_user(self, account_id: int, user_id: int) -> AccountModel:
        """Revoke a user's AUTHORIZED access to an account.

        Removing a user that is not authorized succeeds without changes. The
        PRIMARY association is never removed.

        Raises:
            AccountNotFoundError: If no account has this ID.
        """
        account = await self.get_account(account_id)

        removed = account.remove_authorized_user(user_id)
        for account_user in removed:
            await self.account_user_repo.delete(account_user)

        if removed:
            logger.info("Authorized user removed", account_id=account_id, user_id=user_id)
        return account
