"""Repository for account-user associations."""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from accounthub.domain.entities.account_user_role import AccountUserRole
from accounthub.infrastructure.persistence.models import (
    AccountModel,
    AccountUserModel,
    UserModel,
)


class AccountUserRepository:
    """Repository for AccountUserModel rows."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_account_and_user(
        self, account_id: int, user_id: int
    ) -> AccountUserModel | None:
        """Get the association for an (account, user) pair, in any role.

        Args:
            account_id: Account ID.
            user_id: User ID.

        Returns:
            The association if one exists, None otherwise.
        """
        result = await self.session.execute(
            select(AccountUserModel).where(
                AccountUserModel.account_id == account_id,
                AccountUserModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_account_and_role(
        self, account_id: int, role: AccountUserRole
    ) -> list[AccountUserModel]:
        result = await self.session.execute(
            select(AccountUserModel)
            .where(
                AccountUserModel.account_id == account_id,
                AccountUserModel.role == role,
            )
            .order_by(AccountUserModel.user_id)
        )
        return list(result.scalars().all())

    async def count_primary_users(self, account_id: int) -> int:
        result = await self.session.execute(
            select(func.count(AccountUserModel.id)).where(
                AccountUserModel.account_id == account_id,
                AccountUserModel.role == AccountUserRole.PRIMARY,
            )
        )
        return result.scalar_one() or 0

    async def count_accounts_by_user(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(AccountUserModel.id)).where(
                AccountUserModel.user_id == user_id
            )
        )
        return result.scalar_one() or 0

    async def get_total_balance_by_user(self, user_id: int) -> Decimal:
        """Sum the balances of every account the user is associated with.

        The balances are fetched as exact decimals and added here, so the
        total cannot overflow the per-account column range.

        Returns:
            The total, 0.00 when the user has no accounts.
        """
        result = await self.session.execute(
            select(AccountModel.balance)
            .join(AccountUserModel, AccountUserModel.account_id == AccountModel.id)
            .where(AccountUserModel.user_id == user_id)
        )
        return sum(result.scalars().all(), Decimal("0.00"))

    async def create(
        self, account: AccountModel, user: UserModel, role: AccountUserRole
    ) -> AccountUserModel:
        """Create an association visible from both the account and the user.

        Args:
            account: The account side.
            user: The user side.
            role: PRIMARY or AUTHORIZED.

        Returns:
            The flushed association.
        """
        if role == AccountUserRole.AUTHORIZED:
            account_user = account.add_authorized_user(user)
        else:
            account_user = AccountUserModel(account=account, user=user, role=role)
        self.session.add(account_user)
        await self.session.flush()
        return account_user

    async def delete(self, account_user: AccountUserModel) -> None:
        """Delete an association and detach it from both sides."""
        account_user.unlink()
        await self.session.delete(account_user)
        await self.session.flush()
