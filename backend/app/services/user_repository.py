"""User Repository — SQLAlchemy implementation of the UserRepository protocol.

Invariants:
    - Emails are compared exactly; callers lower-case before lookup
    - A unique-constraint violation on email surfaces as EmailTakenError
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import UserId
from app.core.errors import EmailTakenError
from app.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """Credential store over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def add(
        self, name: str, email: str, password_hash: str, tokens_balance: int,
    ) -> User:
        user = User(
            name=name, email=email,
            password_hash=password_hash, tokens_balance=tokens_balance,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.info("Email uniqueness violation on register")
            raise EmailTakenError() from e
        await self.db.refresh(user)
        return user
