"""Site Service — ownership-scoped CRUD against a real (SQLite) repository.

Tests cover:
    - Cross-user get/update/delete raise SiteNotFoundError, never succeed
    - Duplicate (owner, url) raises SiteConflictError and persists no second row
    - The DB unique constraint is the enforcement boundary (pre-check bypassed)
    - Other integrity errors (missing owner FK) are not mistaken for URL conflicts
    - Same URL is allowed for different owners
    - Partial updates leave unspecified fields unchanged
    - Switching to GENERIC clears wp_config whatever its prior value
    - Listing is newest-first with child counts; deletion cascades to children
"""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.core.domain_types import SiteId, UserId
from app.core.errors import SiteConflictError, SiteNotFoundError
from app.models.article import Article
from app.models.automation import Automation
from app.models.site import Site
from app.models.source import Source
from app.schemas.site import SiteCreate, SiteUpdate
from app.services.site_service import SiteService

WP_CONFIG = {"username": "ed", "password": "pw", "apiUrl": "https://wp.a.com/wp-json/wp/v2"}


@pytest.fixture
def service(site_repo):
    return SiteService(site_repo)


@pytest.fixture
async def owner(make_user):
    return await make_user(name="Ann")


@pytest.fixture
async def stranger(make_user):
    return await make_user(name="Bob")


async def _create(service, owner, **fields):
    data = {"name": "Blog", "url": "https://a.com", "type": "GENERIC", **fields}
    return await service.create_site(UserId(owner.id), SiteCreate.model_validate(data))


async def _site_rows(db) -> int:
    return (await db.execute(select(func.count(Site.id)))).scalar_one()


# --- create ---------------------------------------------------------------------

async def test_create_assigns_owner_and_defaults(service, owner):
    site = await _create(service, owner)
    assert site.user_id == owner.id
    assert site.status == "ACTIVE"
    assert site.wp_config is None
    assert site.created_at is not None and site.updated_at is not None


async def test_create_wordpress_keeps_config(service, owner):
    site = await _create(service, owner, type="WORDPRESS", wpConfig=WP_CONFIG)
    assert site.type == "WORDPRESS"
    assert site.wp_config == WP_CONFIG


async def test_create_generic_drops_supplied_config(service, owner):
    site = await _create(service, owner, wpConfig=WP_CONFIG)
    assert site.wp_config is None


async def test_duplicate_url_conflicts_without_second_row(service, owner, test_db):
    await _create(service, owner)
    with pytest.raises(SiteConflictError):
        await _create(service, owner, name="Blog again")
    assert await _site_rows(test_db) == 1


async def test_unique_constraint_rejects_when_precheck_misses(service, site_repo, owner, test_db, monkeypatch):
    await _create(service, owner)

    async def never_taken(*args, **kwargs):
        return False

    monkeypatch.setattr(site_repo, "url_taken", never_taken)
    with pytest.raises(SiteConflictError):
        await _create(service, owner)
    assert await _site_rows(test_db) == 1


async def test_same_url_allowed_for_different_owners(service, owner, stranger):
    first = await _create(service, owner)
    second = await _create(service, stranger)
    assert first.id != second.id


# --- ownership ------------------------------------------------------------------

async def test_get_as_other_user_is_not_found(service, owner, stranger):
    site = await _create(service, owner)
    with pytest.raises(SiteNotFoundError):
        await service.get_site(UserId(stranger.id), SiteId(site.id))


async def test_update_as_other_user_is_not_found_and_unchanged(service, owner, stranger):
    site = await _create(service, owner)
    with pytest.raises(SiteNotFoundError):
        await service.update_site(
            UserId(stranger.id), SiteId(site.id), SiteUpdate(name="Hijacked"),
        )
    fetched, _ = await service.get_site(UserId(owner.id), SiteId(site.id))
    assert fetched.name == "Blog"


async def test_delete_as_other_user_is_not_found_and_kept(service, owner, stranger, test_db):
    site = await _create(service, owner)
    with pytest.raises(SiteNotFoundError):
        await service.delete_site(UserId(stranger.id), SiteId(site.id))
    assert await _site_rows(test_db) == 1


async def test_list_only_returns_own_sites(service, owner, stranger):
    await _create(service, owner)
    await _create(service, stranger, url="https://b.com")
    rows = await service.list_sites(UserId(owner.id))
    assert [site.url for site, _ in rows] == ["https://a.com"]


# --- update ---------------------------------------------------------------------

async def test_partial_update_leaves_other_fields(service, owner):
    site = await _create(service, owner, type="WORDPRESS", wpConfig=WP_CONFIG)
    updated = await service.update_site(
        UserId(owner.id), SiteId(site.id), SiteUpdate(status="INACTIVE"),
    )
    assert updated.status == "INACTIVE"
    assert updated.name == "Blog"
    assert updated.url == "https://a.com"
    assert updated.type == "WORDPRESS"
    assert updated.wp_config == WP_CONFIG


async def test_switch_to_generic_clears_config(service, owner):
    site = await _create(service, owner, type="WORDPRESS", wpConfig=WP_CONFIG)
    updated = await service.update_site(
        UserId(owner.id), SiteId(site.id), SiteUpdate(type="GENERIC"),
    )
    assert updated.type == "GENERIC"
    assert updated.wp_config is None


async def test_switch_to_generic_ignores_config_in_same_request(service, owner):
    site = await _create(service, owner, type="WORDPRESS", wpConfig=WP_CONFIG)
    updated = await service.update_site(
        UserId(owner.id), SiteId(site.id),
        SiteUpdate.model_validate({"type": "GENERIC", "wpConfig": {"username": "x"}}),
    )
    assert updated.wp_config is None


async def test_config_without_type_replaces_wordpress_config(service, owner):
    site = await _create(service, owner, type="WORDPRESS", wpConfig=WP_CONFIG)
    updated = await service.update_site(
        UserId(owner.id), SiteId(site.id),
        SiteUpdate.model_validate({"wpConfig": {"username": "admin"}}),
    )
    assert updated.wp_config == {"username": "admin", "password": "pw", "apiUrl": None}


async def test_config_with_new_password_replaces_it(service, owner):
    site = await _create(service, owner, type="WORDPRESS", wpConfig=WP_CONFIG)
    updated = await service.update_site(
        UserId(owner.id), SiteId(site.id),
        SiteUpdate.model_validate({"wpConfig": {**WP_CONFIG, "password": "rotated"}}),
    )
    assert updated.wp_config["password"] == "rotated"


async def test_config_without_type_ignored_on_generic(service, owner):
    site = await _create(service, owner)
    updated = await service.update_site(
        UserId(owner.id), SiteId(site.id),
        SiteUpdate.model_validate({"wpConfig": {"username": "admin"}}),
    )
    assert updated.wp_config is None


async def test_update_url_to_own_other_site_conflicts(service, owner):
    await _create(service, owner)
    second = await _create(service, owner, url="https://b.com")
    with pytest.raises(SiteConflictError):
        await service.update_site(
            UserId(owner.id), SiteId(second.id), SiteUpdate(url="https://a.com"),
        )


async def test_update_url_to_same_value_is_allowed(service, owner):
    site = await _create(service, owner)
    updated = await service.update_site(
        UserId(owner.id), SiteId(site.id), SiteUpdate(url="https://a.com", name="Renamed"),
    )
    assert updated.name == "Renamed"


# --- list / get / delete --------------------------------------------------------

async def test_list_is_newest_first_with_counts(service, owner, test_db):
    older = await _create(service, owner, name="Old", url="https://old.com")
    await _create(service, owner, name="New", url="https://new.com")
    test_db.add_all([
        Article(site_id=older.id, title="A1"),
        Article(site_id=older.id, title="A2"),
        Automation(site_id=older.id, name="Daily"),
        Source(site_id=older.id, name="Feed"),
    ])
    await test_db.commit()

    rows = await service.list_sites(UserId(owner.id))
    assert [site.name for site, _ in rows] == ["New", "Old"]
    assert rows[0][1] == {"articles": 0, "automations": 0, "sources": 0}
    assert rows[1][1] == {"articles": 2, "automations": 1, "sources": 1}


async def test_get_returns_counts(service, owner, test_db):
    site = await _create(service, owner)
    test_db.add(Source(site_id=site.id, name="Sitemap"))
    await test_db.commit()
    _, counts = await service.get_site(UserId(owner.id), SiteId(site.id))
    assert counts == {"articles": 0, "automations": 0, "sources": 1}


async def test_delete_cascades_to_children(service, owner, test_db):
    site = await _create(service, owner)
    test_db.add(Article(site_id=site.id, title="A1"))
    await test_db.commit()

    await service.delete_site(UserId(owner.id), SiteId(site.id))

    assert await _site_rows(test_db) == 0
    remaining = (await test_db.execute(select(func.count(Article.id)))).scalar_one()
    assert remaining == 0


async def test_delete_twice_is_not_found(service, owner):
    site = await _create(service, owner)
    await service.delete_site(UserId(owner.id), SiteId(site.id))
    with pytest.raises(SiteNotFoundError):
        await service.delete_site(UserId(owner.id), SiteId(site.id))


async def test_summary_totals(service, owner, stranger, test_db):
    site = await _create(service, owner)
    other = await _create(service, stranger)
    test_db.add_all([
        Article(site_id=site.id, title="Mine"),
        Article(site_id=other.id, title="Theirs"),
        Automation(site_id=site.id, name="Weekly"),
    ])
    await test_db.commit()
    totals = await service.summary(UserId(owner.id))
    assert totals == {"sites": 1, "articles": 1, "automations": 1, "sources": 0}


async def test_foreign_key_violation_is_not_reported_as_conflict(site_repo, test_db):
    values = {"name": "Orphan", "url": "https://a.com", "type": "GENERIC", "status": "ACTIVE"}
    with pytest.raises(IntegrityError):
        await site_repo.add(UserId(uuid.uuid4()), values)
    assert await _site_rows(test_db) == 0
