"""Администрирование аккаунтов и первичный администратор."""

import pytest

from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.core.security import create_access_token
from app.domains.articles.services import ArticleService
from app.domains.identity.entities import Role
from app.domains.identity.services import AccountService, IdentityService
from app.domains.reviews.services import ReviewService


async def test_create_user_hashes_password(session, callers):
    service = AccountService(session)

    user = await service.create_user(callers["admin"], "bob", "bob@x.com", "p", "Author")

    assert user.id is not None
    assert user.role is Role.AUTHOR
    assert user.is_blocked is False
    assert user.password_hash != "p"
    assert user.authenticate("p")
    assert not user.authenticate("q")


async def test_duplicate_email_is_a_conflict(session, callers):
    service = AccountService(session)
    await service.create_user(callers["admin"], "bob", "bob@x.com", "p", "Author")

    with pytest.raises(ConflictError, match="Email already registered"):
        await service.create_user(callers["admin"], "robert", "bob@x.com", "p", "Author")


async def test_duplicate_username_is_a_conflict(session, callers):
    service = AccountService(session)
    await service.create_user(callers["admin"], "bob", "bob@x.com", "p", "Reviewer")

    with pytest.raises(ConflictError, match="Username already taken"):
        await service.create_user(callers["admin"], "bob", "other@x.com", "p", "Reviewer")


@pytest.mark.parametrize("role", ["Admin", "Editor", "author", ""])
async def test_create_user_rejects_other_roles(session, callers, role):
    with pytest.raises(ValidationError, match="Invalid role"):
        await AccountService(session).create_user(callers["admin"], "bob", "bob@x.com", "p", role)


async def test_list_users(session, callers, users):
    listed = await AccountService(session).list_users(callers["admin"])

    assert [u.username for u in listed] == ["admin", "alice", "carol", "rita", "roger"]
    assert {u.role for u in listed} == {Role.ADMIN, Role.AUTHOR, Role.REVIEWER}


async def test_toggle_block_flips_flag(session, callers, users):
    service = AccountService(session)
    target = users["reviewer"].id

    assert (await service.toggle_block_user(callers["admin"], target)).is_blocked is True
    assert (await service.toggle_block_user(callers["admin"], target)).is_blocked is False


async def test_toggle_block_missing_user(session, callers):
    with pytest.raises(NotFoundError):
        await AccountService(session).toggle_block_user(callers["admin"], 999)


async def test_blocked_user_cannot_log_in_or_use_token(session, callers, users):
    await AccountService(session).toggle_block_user(callers["admin"], users["author"].id)
    identity = IdentityService(session)

    with pytest.raises(AuthenticationError):
        await identity.login_user("alice", "secret")

    token = create_access_token({"sub": str(users["author"].id), "role": "Author"})
    with pytest.raises(AuthenticationError):
        await identity.caller_from_token(token)


async def test_delete_user_cascades(submit, session, storage, callers, users):
    own = await submit(title="Alice paper")
    other = await submit(title="Carol paper", author="other_author")
    reviews = ReviewService(session)
    await reviews.create_review(callers["reviewer"], other.id, "Good", "Accepted")
    articles = ArticleService(session, storage)

    await AccountService(session, storage).delete_user(callers["admin"], users["author"].id)
    await AccountService(session, storage).delete_user(callers["admin"], users["reviewer"].id)

    with pytest.raises(NotFoundError):
        await articles.get_article(callers["admin"], own.id)
    assert not storage.exists(own.file_path)

    # Статья другого автора осталась, рецензия удаленного рецензента исчезла
    remaining = await articles.get_article(callers["admin"], other.id)
    assert remaining.reviews == []
    assert [a.id for a in await articles.list_articles(callers["admin"])] == [other.id]


async def test_delete_user_tolerates_missing_blob(submit, session, storage, callers, users):
    article = await submit()
    storage.delete(article.file_path)

    await AccountService(session, storage).delete_user(callers["admin"], users["author"].id)

    with pytest.raises(NotFoundError):
        await AccountService(session, storage).delete_user(callers["admin"], users["author"].id)


async def test_bootstrap_admin_is_idempotent(session):
    identity = IdentityService(session)

    admin = await identity.bootstrap_admin("root", "root@journal.org", "s3cret")
    assert admin.role is Role.ADMIN
    assert await identity.bootstrap_admin("root", "root@journal.org", "other") is None

    token = await identity.login_user("root", "s3cret")
    caller = await identity.caller_from_token(token)
    assert caller.role is Role.ADMIN
    assert caller.id == admin.id


@pytest.mark.parametrize("username, email", [
    ("u" * 51, "long@x.com"),
    ("   ", "blank@x.com"),
    ("bob", "   "),
    ("bob", "e" * 95 + "@x.com"),
])
async def test_create_user_enforces_field_limits(session, callers, username, email):
    service = AccountService(session)

    with pytest.raises(ValidationError):
        await service.create_user(callers["admin"], username, email, "p", "Author")

    listed = await service.list_users(callers["admin"])
    assert len(listed) == 5
    assert all(len(u.username) <= 50 for u in listed)


async def test_create_user_strips_username_and_email(session, callers):
    user = await AccountService(session).create_user(
        callers["admin"], "  bob  ", " bob@x.com ", "p", "Author"
    )

    assert user.username == "bob"
    assert user.email == "bob@x.com"
    assert (await AccountService(session).create_user(
        callers["admin"], "u" * 50, "fifty@x.com", "p", "Reviewer"
    )).username == "u" * 50


async def test_bootstrap_admin_enforces_field_limits(session):
    identity = IdentityService(session)

    with pytest.raises(ValidationError):
        await identity.bootstrap_admin("u" * 80, "root@journal.org", "s3cret")
    with pytest.raises(ValidationError):
        await identity.bootstrap_admin("root", "root@journal.org", "")
