"""User Service — registration and credential checks against the credential store.

Invariants:
    - New users start with tokens_balance == WELCOME_BONUS and role USER
    - Duplicate emails raise EmailTakenError (pre-check, then the unique constraint)
    - Plaintext passwords are hashed before persistence and never logged
    - Unknown email and wrong password raise the same InvalidCredentialsError

Design Decisions:
    - bcrypt runs in a worker thread (asyncio.to_thread): hashing is CPU-bound and would
      otherwise stall the event loop for every concurrent request
"""

import asyncio
import logging

from app.core.domain_types import WELCOME_BONUS
from app.core.errors import EmailTakenError, InvalidCredentialsError
from app.core.repository_protocols import UserLike, UserRepository
from app.infrastructure.passwords import hash_password, verify_password
from app.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)


class UserService:
    """Account creation and authentication."""

    def __init__(self, repository: UserRepository, bcrypt_rounds: int = 12):
        self.repository = repository
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, data: RegisterRequest) -> UserLike:
        if await self.repository.get_by_email(data.email) is not None:
            logger.info("Registration rejected: email already registered")
            raise EmailTakenError()

        password_hash = await asyncio.to_thread(
            hash_password, data.password, self.bcrypt_rounds,
        )
        user = await self.repository.add(
            name=data.name,
            email=data.email,
            password_hash=password_hash,
            tokens_balance=WELCOME_BONUS,
        )
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def authenticate(self, email: str, password: str) -> UserLike:
        user = await self.repository.get_by_email(email)
        if user is None:
            raise InvalidCredentialsError()
        ok = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not ok:
            logger.info("Login rejected: bad password", extra={"user_id": user.id})
            raise InvalidCredentialsError()
        return user
