"""Result of an account balance metrics query."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountMetrics:
    """Number of accounts matching a balance condition.

    Attributes:
        count: How many accounts satisfy the condition.
        condition: Human-readable form of the condition, e.g. ``balance > 100``.
    """

    count: int
    condition: str
