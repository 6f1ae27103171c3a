"""Domain services for AccountHub.

Services contain business logic that doesn't naturally fit within a single
entity. Only the storage-free helpers are re-exported here; the rule engines
(UserService, AccountService, AccountMetricsService) are imported from their
own modules because they work against a database session.
"""

from accounthub.domain.services.email_normalizer import normalize_email
from accounthub.domain.services.field_validator import (
    FieldValidationError,
    FieldValidator,
    raise_for_errors,
)
from accounthub.domain.services.relationship_view import (
    build_account_summaries,
    calculate_total_balance,
    order_for_account,
    order_for_user,
)

__all__ = [
    "FieldValidationError",
    "FieldValidator",
    "build_account_summaries",
    "calculate_total_balance",
    "normalize_email",
    "order_for_account",
    "order_for_user",
    "raise_for_errors",
]
