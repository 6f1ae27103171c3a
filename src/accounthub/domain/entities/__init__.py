"""Domain entities for AccountHub.

Entities are plain Python types that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from accounthub.domain.entities.account_metrics import AccountMetrics
from accounthub.domain.entities.account_user_role import AccountUserRole
from accounthub.domain.entities.user_balance import AccountSummary, UserBalance

__all__ = [
    "AccountMetrics",
    "AccountSummary",
    "AccountUserRole",
    "UserBalance",
]
