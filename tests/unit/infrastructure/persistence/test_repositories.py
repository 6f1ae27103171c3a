"""Repository tests against an in-memory SQLite database."""

from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError

from accounthub.domain.entities import AccountUserRole
from accounthub.infrastructure.persistence.models import AccountModel, UserModel
from accounthub.infrastructure.persistence.repositories import (
    AccountRepository,
    AccountUserRepository,
    UserRepository,
)


async def _create_user(session, name="Ada", email="ada@example.com") -> UserModel:
    return await UserRepository(session).create(UserModel(name=name, email=email))


async def _create_account(session, number, user, balance="0") -> AccountModel:
    account = AccountModel(account_number=number, primary_user=user, balance=Decimal(balance))
    return await AccountRepository(session).create(account)


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_create_and_get_by_email_normalized(self, db_session):
        user = await _create_user(db_session, email="  Ada@Example.COM ")

        assert user.id is not None
        found = await UserRepository(db_session).get_by_email("ADA@example.com ")
        assert found is user
        assert await UserRepository(db_session).email_exists("ada@EXAMPLE.com")

    @pytest.mark.asyncio
    async def test_duplicate_email_violates_unique_constraint(self, db_session):
        await _create_user(db_session, email="ada@example.com")

        with pytest.raises(IntegrityError):
            await UserRepository(db_session).create(
                UserModel(name="Other", email="ADA@example.com")
            )

    @pytest.mark.asyncio
    async def test_list_all_ordered_by_id(self, db_session):
        first = await _create_user(db_session, "A", "a@example.com")
        second = await _create_user(db_session, "B", "b@example.com")

        users = await UserRepository(db_session).list_all()

        assert [u.id for u in users] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_delete(self, db_session):
        user = await _create_user(db_session)
        repo = UserRepository(db_session)

        await repo.delete(user)

        assert await repo.get_by_id(user.id) is None


class TestAccountRepository:
    @pytest_asyncio.fixture
    async def seeded(self, db_session):
        owner = await _create_user(db_session)
        for index, balance in enumerate(["0", "100", "500", "1500", "2500"]):
            await _create_account(db_session, f"ACC-{index}", owner, balance)
        await db_session.commit()
        return owner

    @pytest.mark.asyncio
    async def test_counts(self, db_session, seeded):
        repo = AccountRepository(db_session)

        assert await repo.count_with_balance_greater_than(Decimal("100")) == 3
        assert await repo.count_with_balance_less_than(Decimal("500")) == 2
        assert await repo.count_with_balance_between(Decimal("500"), Decimal("2500")) == 1
        assert await repo.count_with_balance_between(Decimal("1000"), Decimal("100")) == 0

    @pytest.mark.asyncio
    async def test_counts_with_sub_cent_and_out_of_range_bounds(self, db_session, seeded):
        repo = AccountRepository(db_session)

        assert await repo.count_with_balance_greater_than(Decimal("99.999")) == 4
        assert await repo.count_with_balance_less_than(Decimal("100.001")) == 2
        assert await repo.count_with_balance_greater_than(Decimal("-5")) == 5
        assert await repo.count_with_balance_less_than(Decimal("0")) == 0
        assert await repo.count_with_balance_greater_than(Decimal("1E+30")) == 0
        assert await repo.count_with_balance_less_than(Decimal("1E+30")) == 5

    @pytest.mark.asyncio
    async def test_seventeen_digit_balance_is_exact(self, db_session, session_factory):
        owner = await _create_user(db_session)
        await _create_account(db_session, "ACC-BIG", owner, "12345678901234567.89")
        await db_session.commit()

        async with session_factory() as session:
            repo = AccountRepository(session)
            account = await repo.get_by_account_number("ACC-BIG")

            assert str(account.balance) == "12345678901234567.89"
            assert await repo.count_with_balance_greater_than(
                Decimal("12345678901234567.88")
            ) == 1
            assert await repo.count_with_balance_greater_than(
                Decimal("12345678901234567.89")
            ) == 0
            assert await repo.count_with_balance_less_than(
                Decimal("12345678901234567.90")
            ) == 1

    @pytest.mark.asyncio
    async def test_get_by_account_number(self, db_session, seeded):
        account = await AccountRepository(db_session).get_by_account_number("ACC-2")

        assert account.balance == Decimal("500.00")
        assert account.primary_user is seeded

    @pytest.mark.asyncio
    async def test_get_by_user_id_filters_by_role(self, db_session, seeded):
        other = await _create_user(db_session, "Grace", "grace@example.com")
        shared = await AccountRepository(db_session).get_by_account_number("ACC-4")
        await AccountUserRepository(db_session).create(shared, other, AccountUserRole.AUTHORIZED)

        repo = AccountRepository(db_session)
        assert [a.account_number for a in await repo.get_by_user_id(other.id)] == ["ACC-4"]
        assert await repo.get_by_user_id(other.id, AccountUserRole.PRIMARY) == []
        assert len(await repo.get_by_user_id(seeded.id, AccountUserRole.PRIMARY)) == 5

    @pytest.mark.asyncio
    async def test_delete_removes_associations(self, db_session):
        owner = await _create_user(db_session)
        account = await _create_account(db_session, "ACC-1", owner)
        await db_session.commit()

        await AccountRepository(db_session).delete(account)

        assert owner.account_users == []
        assert await AccountUserRepository(db_session).count_accounts_by_user(owner.id) == 0

    @pytest.mark.asyncio
    async def test_duplicate_account_number(self, db_session):
        owner = await _create_user(db_session)
        await _create_account(db_session, "ACC-1", owner)

        with pytest.raises(IntegrityError):
            await _create_account(db_session, "ACC-1", owner)


class TestAccountUserRepository:
    @pytest.mark.asyncio
    async def test_primary_association_is_persisted(self, db_session):
        owner = await _create_user(db_session)
        account = await _create_account(db_session, "ACC-1", owner, "10")
        repo = AccountUserRepository(db_session)

        association = await repo.get_by_account_and_user(account.id, owner.id)

        assert association.role == AccountUserRole.PRIMARY
        assert await repo.count_primary_users(account.id) == 1

    @pytest.mark.asyncio
    async def test_total_balance_by_user(self, db_session):
        ada = await _create_user(db_session)
        grace = await _create_user(db_session, "Grace", "grace@example.com")
        await _create_account(db_session, "ACC-1", ada, "100.10")
        shared = await _create_account(db_session, "ACC-2", grace, "0.20")
        repo = AccountUserRepository(db_session)
        await repo.create(shared, ada, AccountUserRole.AUTHORIZED)

        assert await repo.get_total_balance_by_user(ada.id) == Decimal("100.30")
        assert await repo.count_accounts_by_user(ada.id) == 2

    @pytest.mark.asyncio
    async def test_total_balance_of_largest_accounts_is_exact(self, db_session):
        ada = await _create_user(db_session)
        await _create_account(db_session, "ACC-1", ada, "92233720368547758.07")
        await _create_account(db_session, "ACC-2", ada, "92233720368547758.07")
        await db_session.commit()
        db_session.expunge_all()

        total = await AccountUserRepository(db_session).get_total_balance_by_user(ada.id)

        assert total == Decimal("184467440737095516.14")

    @pytest.mark.asyncio
    async def test_total_balance_without_accounts(self, db_session):
        user = await _create_user(db_session)

        total = await AccountUserRepository(db_session).get_total_balance_by_user(user.id)

        assert total == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_get_by_account_and_role(self, db_session):
        ada = await _create_user(db_session)
        grace = await _create_user(db_session, "Grace", "grace@example.com")
        account = await _create_account(db_session, "ACC-1", ada)
        repo = AccountUserRepository(db_session)
        await repo.create(account, grace, AccountUserRole.AUTHORIZED)

        authorized = await repo.get_by_account_and_role(account.id, AccountUserRole.AUTHORIZED)

        assert [au.user_id for au in authorized] == [grace.id]

    @pytest.mark.asyncio
    async def test_pair_is_unique(self, db_session):
        ada = await _create_user(db_session)
        account = await _create_account(db_session, "ACC-1", ada)

        with pytest.raises(IntegrityError):
            await AccountUserRepository(db_session).create(
                account, ada, AccountUserRole.AUTHORIZED
            )

    @pytest.mark.asyncio
    async def test_delete_detaches_both_sides(self, db_session):
        ada = await _create_user(db_session)
        grace = await _create_user(db_session, "Grace", "grace@example.com")
        account = await _create_account(db_session, "ACC-1", ada)
        repo = AccountUserRepository(db_session)
        association = await repo.create(account, grace, AccountUserRole.AUTHORIZED)

        await repo.delete(association)

        assert account.authorized_users == []
        assert grace.account_users == []
        assert await repo.get_by_account_and_user(account.id, grace.id) is None
