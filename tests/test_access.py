"""Разграничение доступа по ролям и владению статьей."""

import pytest

from app.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from app.domains.articles.entities import ArticleAccess, ManuscriptUpload
from app.domains.articles.services import ArticleService
from app.domains.identity.access import require_caller, require_role
from app.domains.identity.entities import Caller, Role
from app.domains.identity.services import AccountService
from app.domains.reviews.services import ReviewService

from conftest import PDF_BYTES


def test_require_caller_rejects_missing_and_blocked():
    with pytest.raises(AuthenticationError):
        require_caller(None)
    with pytest.raises(AuthenticationError):
        require_caller(Caller(id=1, role=Role.ADMIN, blocked=True))


def test_require_role():
    reviewer = Caller(id=3, role=Role.REVIEWER)

    assert require_role(reviewer, Role.REVIEWER, Role.ADMIN) is reviewer
    with pytest.raises(AuthorizationError):
        require_role(reviewer, Role.AUTHOR)


@pytest.mark.parametrize("role, can_view", [
    (Role.AUTHOR, False),
    (Role.REVIEWER, True),
    (Role.ADMIN, True),
])
def test_article_visibility_for_non_owner(role, can_view):
    access = ArticleAccess(author_id=1)
    assert access.can_view(Caller(id=2, role=role)) is can_view
    assert access.can_view(Caller(id=1, role=Role.AUTHOR))


async def test_author_lists_only_own_articles(submit, session, callers):
    await submit(title="Mine")
    await submit(title="Theirs", author="other_author")
    service = ArticleService(session)

    own = await service.list_articles(callers["author"])
    assert [a.title for a in own] == ["Mine"]
    assert all(a.author_id == callers["author"].id for a in own)

    for key in ("reviewer", "admin"):
        assert [a.title for a in await service.list_articles(callers[key])] == ["Mine", "Theirs"]


async def test_non_owner_author_is_forbidden_not_missing(submit, session, callers):
    article = await submit(author="other_author")
    service = ArticleService(session)

    with pytest.raises(AuthorizationError):
        await service.get_article(callers["author"], article.id)
    with pytest.raises(NotFoundError):
        await service.get_article(callers["author"], article.id + 100)

    detail = await service.get_article(callers["other_author"], article.id)
    assert detail.author_name == "carol"


@pytest.mark.parametrize("role_key", ["reviewer", "admin"])
async def test_only_authors_submit(session, storage, callers, role_key):
    service = ArticleService(session, storage)

    with pytest.raises(AuthorizationError):
        await service.submit_article(
            callers[role_key], "Paper", ManuscriptUpload(filename="x.pdf", content=PDF_BYTES)
        )


@pytest.mark.parametrize("role_key", ["author", "reviewer"])
async def test_only_admin_deletes_articles(submit, session, storage, callers, role_key):
    article = await submit()

    with pytest.raises(AuthorizationError):
        await ArticleService(session, storage).delete_article(callers[role_key], article.id)


@pytest.mark.parametrize("role_key", ["author", "admin"])
async def test_review_operations_are_reviewer_only(submit, session, callers, role_key):
    article = await submit()
    service = ReviewService(session)

    with pytest.raises(AuthorizationError):
        await service.create_review(callers[role_key], article.id, "Text", "Accepted")
    with pytest.raises(AuthorizationError):
        await service.list_my_reviews(callers[role_key])
    with pytest.raises(AuthorizationError):
        await service.list_available_articles(callers[role_key])


@pytest.mark.parametrize("role_key", ["author", "reviewer"])
async def test_account_administration_is_admin_only(session, callers, users, role_key):
    service = AccountService(session)
    caller = callers[role_key]

    with pytest.raises(AuthorizationError):
        await service.list_users(caller)
    with pytest.raises(AuthorizationError):
        await service.create_user(caller, "eve", "eve@journal.org", "pw", "Author")
    with pytest.raises(AuthorizationError):
        await service.toggle_block_user(caller, users["author"].id)
    with pytest.raises(AuthorizationError):
        await service.delete_user(caller, users["author"].id)


async def test_blocked_caller_is_rejected_before_data_access(session, callers):
    blocked = Caller(id=callers["admin"].id, role=Role.ADMIN, blocked=True)

    with pytest.raises(AuthenticationError):
        await ArticleService(session).list_articles(blocked)
    with pytest.raises(AuthenticationError):
        await AccountService(session).list_users(blocked)
