import enum
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List

from app.core.exceptions import ConflictError, ValidationError
from app.domains.identity.entities import Caller, Role


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArticleStatus(str, enum.Enum):
    NOT_REVIEWED = "NotReviewed"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ArticleStatus.NOT_REVIEWED


class ReviewDecision(str, enum.Enum):
    """Решение рецензента, становится новым статусом статьи"""
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"

    @property
    def article_status(self) -> ArticleStatus:
        return ArticleStatus(self.value)


def document_extension(filename: Optional[str], allowed_extensions: List[str]) -> str:
    """Расширение загруженной рукописи, если оно из разрешенных"""
    if not filename:
        raise ValidationError("No file uploaded")

    extension = os.path.splitext(filename)[1].lower()
    if extension not in allowed_extensions:
        readable = " and ".join(ext.lstrip(".").upper() for ext in allowed_extensions)
        raise ValidationError(f"Only {readable} files are allowed")
    return extension


class Article:
    """Сущность статьи, поданной на рецензирование"""

    def __init__(
        self,
        id: Optional[int],
        title: str,
        file_path: str,
        author_id: int,
        status: ArticleStatus = ArticleStatus.NOT_REVIEWED,
        submission_date: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.file_path = file_path
        self.author_id = author_id
        self.status = status
        self.submission_date = submission_date or utcnow()

    def decide(self, decision: ReviewDecision) -> ArticleStatus:
        """Перевод статьи в конечное состояние по решению рецензента"""
        if self.status.is_terminal:
            raise ConflictError("Article has already been decided")
        self.status = decision.article_status
        return self.status

    @classmethod
    def submit(cls, title: str, file_path: str, author_id: int) -> "Article":
        """Создание новой статьи в состоянии NotReviewed"""
        return cls(
            id=None,
            title=title,
            file_path=file_path,
            author_id=author_id,
            status=ArticleStatus.NOT_REVIEWED,
            submission_date=utcnow()
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Article):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Article(id={self.id}, title={self.title}, status={self.status.value})"


class ArticleAccess:
    """Правила видимости статьи для вызывающего"""

    def __init__(self, author_id: int):
        self.author_id = author_id

    def is_owner(self, caller: Caller) -> bool:
        return caller.id == self.author_id

    def can_view(self, caller: Caller) -> bool:
        """Автор видит только свои статьи, остальные роли видят все"""
        if caller.role is Role.AUTHOR:
            return self.is_owner(caller)
        return True


@dataclass
class ArticleSummary:
    id: int
    title: str
    status: ArticleStatus
    submission_date: datetime
    author_id: int
    author_name: str


@dataclass
class ArticleReviewView:
    id: int
    content: str
    status: ReviewDecision
    review_date: datetime
    reviewer_id: int
    reviewer_name: str


@dataclass
class ArticleDetail:
    id: int
    title: str
    status: ArticleStatus
    submission_date: datetime
    author_id: int
    author_name: str
    file_path: str
    reviews: List[ArticleReviewView] = field(default_factory=list)


@dataclass
class ManuscriptUpload:
    """Загруженный файл рукописи до сохранения в хранилище"""
    filename: Optional[str]
    content: bytes

    @property
    def is_empty(self) -> bool:
        return not self.content
