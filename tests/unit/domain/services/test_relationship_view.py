"""Unit tests for the relationship ordering and aggregation helpers."""

from decimal import Decimal
from types import SimpleNamespace

from accounthub.domain.entities import AccountSummary, AccountUserRole
from accounthub.domain.services.relationship_view import (
    build_account_summaries,
    calculate_total_balance,
    order_for_account,
    order_for_user,
)

PRIMARY = AccountUserRole.PRIMARY
AUTHORIZED = AccountUserRole.AUTHORIZED


def _association(account_id, user_id, role, balance="0.00", account_number=None):
    account = SimpleNamespace(
        id=account_id,
        account_number=account_number or f"ACC-{account_id}",
        balance=Decimal(balance),
    )
    user = SimpleNamespace(id=user_id)
    return SimpleNamespace(account=account, user=user, role=role)


def test_order_for_account_puts_primary_first_then_user_id():
    associations = [
        _association(1, 9, AUTHORIZED),
        _association(1, 7, AUTHORIZED),
        _association(1, 8, PRIMARY),
    ]

    ordered = order_for_account(associations)

    assert [(au.role, au.user.id) for au in ordered] == [
        (PRIMARY, 8),
        (AUTHORIZED, 7),
        (AUTHORIZED, 9),
    ]


def test_order_for_user_sorts_by_account_id_within_role():
    associations = [
        _association(30, 1, AUTHORIZED),
        _association(20, 1, PRIMARY),
        _association(10, 1, AUTHORIZED),
        _association(5, 1, PRIMARY),
    ]

    ordered = order_for_user(associations)

    assert [(au.role, au.account.id) for au in ordered] == [
        (PRIMARY, 5),
        (PRIMARY, 20),
        (AUTHORIZED, 10),
        (AUTHORIZED, 30),
    ]


def test_order_is_independent_of_input_order():
    associations = [
        _association(3, 1, AUTHORIZED),
        _association(1, 1, PRIMARY),
        _association(2, 1, AUTHORIZED),
    ]

    forward = [au.account.id for au in order_for_user(associations)]
    backward = [au.account.id for au in order_for_user(list(reversed(associations)))]

    assert forward == backward == [1, 2, 3]


def test_order_handles_none_and_empty():
    assert order_for_account(None) == []
    assert order_for_account([]) == []
    assert order_for_user(None) == []


def test_total_balance_counts_every_role():
    associations = [
        _association(1, 1, PRIMARY, "100.10"),
        _association(2, 1, AUTHORIZED, "0.20"),
        _association(3, 1, AUTHORIZED, "2500.00"),
    ]

    assert calculate_total_balance(associations) == Decimal("2600.30")


def test_total_balance_is_exact_decimal():
    associations = [
        _association(1, 1, PRIMARY, "0.10"),
        _association(2, 1, PRIMARY, "0.20"),
    ]

    total = calculate_total_balance(associations)

    assert total == Decimal("0.30")
    assert isinstance(total, Decimal)


def test_total_balance_of_nothing_is_zero():
    assert calculate_total_balance(None) == Decimal("0.00")
    assert calculate_total_balance([]) == Decimal("0.00")


def test_build_account_summaries_uses_user_side_order():
    associations = [
        _association(4, 1, AUTHORIZED, "5.00", "B-4"),
        _association(9, 1, PRIMARY, "1.00", "A-9"),
    ]

    summaries = build_account_summaries(associations)

    assert summaries == [
        AccountSummary(account_id=9, account_number="A-9", balance=Decimal("1.00"), role=PRIMARY),
        AccountSummary(account_id=4, account_number="B-4", balance=Decimal("5.00"), role=AUTHORIZED),
    ]
