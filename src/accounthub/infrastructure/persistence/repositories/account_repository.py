"""Account repository for database operations."""

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from sqlalchemy import false, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from accounthub.domain.entities.account_user_role import AccountUserRole
from accounthub.domain.services.field_validator import MAX_BALANCE
from accounthub.infrastructure.persistence.models import (
    AccountModel,
    AccountUserModel,
    UserModel,
)
from accounthub.infrastructure.persistence.types import CENT


def _balance_above(amount: Decimal):
    """Condition balance > amount, with the bound rounded down to whole cents.

    Stored balances never have sub-cent digits, so flooring the bound keeps the
    comparison exact. Bounds outside the storable range fold to a constant.
    """
    if amount >= MAX_BALANCE:
        return false()
    if amount < 0:
        return true()
    return AccountModel.balance > amount.quantize(CENT, rounding=ROUND_FLOOR)


def _balance_below(amount: Decimal):
    """Condition balance < amount, with the bound rounded up to whole cents."""
    if amount > MAX_BALANCE:
        return true()
    if amount <= 0:
        return false()
    return AccountModel.balance < amount.quantize(CENT, rounding=ROUND_CEILING)


def _with_user_associations():
    """Load the users of an account together with their own associations."""
    return (
        selectinload(AccountModel.account_users)
        .selectinload(AccountUserModel.user)
        .selectinload(UserModel.account_users)
    )


class AccountRepository:
    """Repository for account database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, account: AccountModel) -> AccountModel:
        """Create a new account together with its pending associations.

        Args:
            account: Account model to create.

        Returns:
            Created account model with its ID assigned.
        """
        self.session.add(account)
        await self.session.flush()
        return account

    async def get_by_id(self, account_id: int) -> AccountModel | None:
        """Get an account by ID.

        Args:
            account_id: Account ID.

        Returns:
            Account model if found, None otherwise.
        """
        result = await self.session.execute(
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .options(_with_user_associations())
        )
        return result.scalar_one_or_none()

    async def get_by_account_number(self, account_number: str) -> AccountModel | None:
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.account_number == account_number)
        )
        return result.scalar_one_or_none()

    async def account_number_exists(self, account_number: str) -> bool:
        result = await self.session.execute(
            select(AccountModel.id)
            .where(AccountModel.account_number == account_number)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[AccountModel]:
        """List every account, ordered by ID."""
        result = await self.session.execute(
            select(AccountModel).order_by(AccountModel.id)
        )
        return list(result.scalars().all())

    async def get_by_user_id(
        self, user_id: int, role: AccountUserRole | None = None
    ) -> list[AccountModel]:
        """List the accounts a user is associated with.

        Args:
            user_id: User ID.
            role: Restrict to associations with this role; any role when None.

        Returns:
            Matching accounts ordered by ID.
        """
        query = (
            select(AccountModel)
            .join(AccountUserModel, AccountUserModel.account_id == AccountModel.id)
            .where(AccountUserModel.user_id == user_id)
        )
        if role is not None:
            query = query.where(AccountUserModel.role == role)
        result = await self.session.execute(query.order_by(AccountModel.id))
        return list(result.scalars().all())

    async def count_with_balance_greater_than(self, amount: Decimal) -> int:
        """Count accounts whose balance is strictly greater than amount."""
        result = await self.session.execute(
            select(func.count(AccountModel.id)).where(_balance_above(amount))
        )
        return result.scalar_one() or 0

    async def count_with_balance_less_than(self, amount: Decimal) -> int:
        """Count accounts whose balance is strictly less than amount."""
        result = await self.session.execute(
            select(func.count(AccountModel.id)).where(_balance_below(amount))
        )
        return result.scalar_one() or 0

    async def count_with_balance_between(self, lower: Decimal, upper: Decimal) -> int:
        """Count accounts with lower < balance < upper.

        Both bounds are exclusive. An empty range (lower >= upper) counts 0.
        """
        result = await self.session.execute(
            select(func.count(AccountModel.id)).where(
                _balance_above(lower),
                _balance_below(upper),
            )
        )
        return result.scalar_one() or 0

    async def update(self, account: AccountModel) -> AccountModel:
        """Flush pending changes of an existing account.

        Args:
            account: Account model with updated fields.

        Returns:
            Updated account model.
        """
        await self.session.flush()
        return account

    async def delete(self, account: AccountModel) -> None:
        """Delete an account and, by cascade, all of its associations.

        Args:
            account: Account model to delete.
        """
        account.release_associations()
        await self.session.delete(account)
        await self.session.flush()
