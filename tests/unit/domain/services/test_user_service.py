"""Unit tests for UserService."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from accounthub.domain.entities import AccountUserRole
from accounthub.domain.exceptions import (
    InvalidArgumentError,
    UserAlreadyExistsError,
    UserHasAccountsError,
    UserNotFoundError,
)
from accounthub.domain.services.user_service import UserService
from accounthub.infrastructure.persistence.models import AccountModel, UserModel


@pytest.fixture
def mock_session():
    """Mock SQLAlchemy session."""
    return AsyncMock()


@pytest.fixture
def user_service(mock_session):
    """UserService instance with mocked repositories."""
    service = UserService(mock_session)
    service.user_repo = AsyncMock()
    service.account_user_repo = AsyncMock()

    async def passthrough(user):
        return user

    service.user_repo.create.side_effect = passthrough
    service.user_repo.update.side_effect = passthrough
    return service


@pytest.mark.asyncio
async def test_create_user_normalizes_email(user_service):
    user_service.user_repo.email_exists.return_value = False

    user = await user_service.create_user("Ada", "  Ada@Example.COM ")

    assert user.name == "Ada"
    assert user.email == "ada@example.com"
    user_service.user_repo.email_exists.assert_awaited_once_with("ada@example.com")
    user_service.user_repo.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_user_duplicate_email(user_service):
    user_service.user_repo.email_exists.return_value = True

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        await user_service.create_user("Ada", "ADA@example.com")

    assert exc_info.value.message == "User already exists with email: ada@example.com"
    user_service.user_repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_user_validates_before_lookup(user_service):
    with pytest.raises(InvalidArgumentError) as exc_info:
        await user_service.create_user("  ", "not-an-email")

    assert exc_info.value.errors == {
        "name": "Name is required",
        "email": "Email should be valid",
    }
    user_service.user_repo.email_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_user_race_is_reported_as_duplicate(user_service, mock_session):
    user_service.user_repo.email_exists.return_value = False
    user_service.user_repo.create.side_effect = IntegrityError(
        "INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.email")
    )

    with pytest.raises(UserAlreadyExistsError):
        await user_service.create_user("Ada", "ada@example.com")

    mock_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_user_not_found(user_service):
    user_service.user_repo.get_by_id.return_value = None

    with pytest.raises(UserNotFoundError, match="User not found with ID: 42"):
        await user_service.get_user(42)


@pytest.mark.asyncio
async def test_update_user_same_email_other_case_skips_uniqueness_check(user_service):
    existing = UserModel(id=1, name="Ada", email="ada@example.com")
    user_service.user_repo.get_by_id.return_value = existing

    user = await user_service.update_user(1, "Ada L.", " ADA@example.com")

    assert user.name == "Ada L."
    assert user.email == "ada@example.com"
    user_service.user_repo.email_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_user_email_taken(user_service):
    user_service.user_repo.get_by_id.return_value = UserModel(
        id=1, name="Ada", email="ada@example.com"
    )
    user_service.user_repo.email_exists.return_value = True

    with pytest.raises(UserAlreadyExistsError):
        await user_service.update_user(1, "Ada", "grace@example.com")

    user_service.user_repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_user_validation_precedes_not_found(user_service):
    user_service.user_repo.get_by_id.return_value = None

    with pytest.raises(InvalidArgumentError):
        await user_service.update_user(99, "", "ada@example.com")

    user_service.user_repo.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_user_not_found(user_service):
    user_service.user_repo.get_by_id.return_value = None

    with pytest.raises(UserNotFoundError):
        await user_service.update_user(99, "Ada", "ada@example.com")


@pytest.mark.asyncio
async def test_delete_user_with_accounts(user_service):
    user_service.user_repo.get_by_id.return_value = UserModel(
        id=1, name="Ada", email="ada@example.com"
    )
    user_service.account_user_repo.count_accounts_by_user.return_value = 1

    with pytest.raises(UserHasAccountsError) as exc_info:
        await user_service.delete_user(1)

    assert exc_info.value.message == (
        "Cannot delete user with ID 1 because they have associated accounts"
    )
    user_service.user_repo.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_user_without_accounts(user_service):
    user = UserModel(id=1, name="Ada", email="ada@example.com")
    user_service.user_repo.get_by_id.return_value = user
    user_service.account_user_repo.count_accounts_by_user.return_value = 0

    await user_service.delete_user(1)

    user_service.user_repo.delete.assert_awaited_once_with(user)


@pytest.mark.asyncio
async def test_delete_user_not_found(user_service):
    user_service.user_repo.get_by_id.return_value = None

    with pytest.raises(UserNotFoundError):
        await user_service.delete_user(5)


@pytest.mark.asyncio
async def test_get_user_balance_sums_every_role(user_service):
    ada = UserModel(id=1, name="Ada", email="ada@example.com")
    grace = UserModel(id=2, name="Grace", email="grace@example.com")
    AccountModel(id=20, account_number="ACC-20", primary_user=ada, balance=Decimal("100.50"))
    shared = AccountModel(
        id=10, account_number="ACC-10", primary_user=grace, balance=Decimal("0.25")
    )
    shared.add_authorized_user(ada)
    user_service.user_repo.get_by_id.return_value = ada

    balance = await user_service.get_user_balance(1)

    assert balance.user_id == 1
    assert balance.total_balance == Decimal("100.75")
    assert [(s.account_id, s.role) for s in balance.accounts] == [
        (20, AccountUserRole.PRIMARY),
        (10, AccountUserRole.AUTHORIZED),
    ]


@pytest.mark.asyncio
async def test_get_user_balance_without_accounts(user_service):
    user_service.user_repo.get_by_id.return_value = UserModel(
        id=3, name="Alan", email="alan@example.com"
    )

    balance = await user_service.get_user_balance(3)

    assert balance.total_balance == Decimal("0.00")
    assert balance.accounts == []
