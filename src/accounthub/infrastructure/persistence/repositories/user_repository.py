"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from accounthub.domain.services.email_normalizer import normalize_email
from accounthub.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model with its ID assigned.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: int) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email, compared under normalization."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        result = await self.session.execute(
            select(UserModel.id)
            .where(UserModel.email == normalize_email(email))
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[UserModel]:
        """List every user, ordered by ID."""
        result = await self.session.execute(select(UserModel).order_by(UserModel.id))
        return list(result.scalars().all())

    async def update(self, user: UserModel) -> UserModel:
        """Flush pending changes of an existing user.

        Args:
            user: User model with updated fields.

        Returns:
            Updated user model.
        """
        await self.session.flush()
        return user

    async def delete(self, user: UserModel) -> None:
        """Delete a user.

        Args:
            user: User model to delete.
        """
        await self.session.delete(user)
        await self.session.flush()
