"""Identity Resolver — session data to Identity or None."""

import uuid

from app.services.identity import SESSION_USER_KEY, Identity, resolve_identity


async def test_missing_key_is_absent(user_repo):
    assert await resolve_identity({}, user_repo) is None


async def test_malformed_id_is_absent(user_repo):
    assert await resolve_identity({SESSION_USER_KEY: "not-a-uuid"}, user_repo) is None


async def test_dangling_id_is_absent(user_repo):
    session = {SESSION_USER_KEY: str(uuid.uuid4())}
    assert await resolve_identity(session, user_repo) is None


async def test_valid_id_resolves_current_record(make_user, user_repo):
    user = await make_user(name="Ann", email="ann@x.com", tokens=42)
    identity = await resolve_identity({SESSION_USER_KEY: str(user.id)}, user_repo)
    assert identity == Identity(
        id=user.id, name="Ann", email="ann@x.com", role="USER", tokens_balance=42,
    )
