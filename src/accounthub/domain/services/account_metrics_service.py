"""Aggregate counts over account balances."""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from accounthub.core.logging import get_logger
from accounthub.domain.entities.account_metrics import AccountMetrics
from accounthub.domain.exceptions import METRICS_PARAMETERS_REQUIRED, InvalidArgumentError
from accounthub.infrastructure.persistence.repositories import AccountRepository

logger = get_logger(__name__)


class AccountMetricsService:
    """Counts accounts whose balance falls in an open range."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.account_repo = AccountRepository(session)

    async def get_account_metrics(
        self,
        greater_than: Decimal | None = None,
        less_than: Decimal | None = None,
    ) -> AccountMetrics:
        """Count accounts by balance.

        Both bounds are exclusive. An inverted range counts zero accounts.

        Args:
            greater_than: Lower bound, if any.
            less_than: Upper bound, if any.

        Returns:
            The count and a text rendering of the condition applied.

        Raises:
            InvalidArgumentError: If neither bound is given.
        """
        if greater_than is None and less_than is None:
            raise InvalidArgumentError(METRICS_PARAMETERS_REQUIRED)

        if greater_than is not None and less_than is not None:
            count = await self.account_repo.count_with_balance_between(greater_than, less_than)
            condition = f"balance > {greater_than} AND balance < {less_than}"
        elif greater_than is not None:
            count = await self.account_repo.count_with_balance_greater_than(greater_than)
            condition = f"balance > {greater_than}"
        else:
            count = await self.account_repo.count_with_balance_less_than(less_than)
            condition = f"balance < {less_than}"

        logger.debug("Account metrics computed", condition=condition, count=count)
        return AccountMetrics(count=count, condition=condition)
