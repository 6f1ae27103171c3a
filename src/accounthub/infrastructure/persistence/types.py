"""Custom column types."""

from decimal import Decimal

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> int:
    """Convert an amount with at most two fractional digits to integer cents."""
    return int(Decimal(amount).quantize(CENT).scaleb(2))


def from_cents(cents: int) -> Decimal:
    return Decimal(cents).scaleb(-2).quantize(CENT)


class Money(TypeDecorator):
    """Exact two-decimal amount stored as a signed 64-bit count of cents.

    SQLite has no decimal storage class, so a plain ``Numeric`` column would be
    bound and compared as a float there. Integer cents compare, sum and
    round-trip exactly on every backend. Bound parameters compared against a
    Money column are converted the same way.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect) -> int | None:
        if value is None:
            return None
        return to_cents(value)

    def process_result_value(self, value: int | None, dialect) -> Decimal | None:
        if value is None:
            return None
        return from_cents(value)
