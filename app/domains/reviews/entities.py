from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.domains.articles.entities import ReviewDecision, utcnow


class Review:
    """Рецензия на статью. После создания не изменяется"""

    def __init__(
        self,
        id: Optional[int],
        content: str,
        status: ReviewDecision,
        reviewer_id: int,
        article_id: int,
        review_date: Optional[datetime] = None
    ):
        self.id = id
        self.content = content
        self.status = status
        self.reviewer_id = reviewer_id
        self.article_id = article_id
        self.review_date = review_date or utcnow()

    @classmethod
    def create_review(
        cls,
        content: str,
        decision: ReviewDecision,
        reviewer_id: int,
        article_id: int
    ) -> "Review":
        return cls(
            id=None,
            content=content,
            status=decision,
            reviewer_id=reviewer_id,
            article_id=article_id,
            review_date=utcnow()
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Review):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Review(id={self.id}, article_id={self.article_id}, status={self.status.value})"


@dataclass
class ReviewSummary:
    """Рецензия вместе с названием статьи"""
    id: int
    content: str
    status: ReviewDecision
    review_date: datetime
    article_id: int
    article_title: str
