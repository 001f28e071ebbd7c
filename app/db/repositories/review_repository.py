from typing import List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from app.db.models.article import Article as ArticleModel
from app.db.models.review import Review as ReviewModel

if TYPE_CHECKING:
    from app.domains.reviews.entities import Review, ReviewSummary


class ReviewRepository:
    """Репозиторий для работы с рецензиями. Удаления и правки нет"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, review: "Review") -> "Review":
        """Добавление рецензии в текущую транзакцию. Без commit"""
        db_review = ReviewModel(
            content=review.content,
            status=review.status,
            review_date=review.review_date,
            reviewer_id=review.reviewer_id,
            article_id=review.article_id
        )

        self.session.add(db_review)
        await self.session.flush()
        return self._to_domain(db_review)

    async def exists_for(self, article_id: int, reviewer_id: int) -> bool:
        """Проверка, оценивал ли рецензент статью"""
        result = await self.session.execute(
            select(ReviewModel.id).where(
                and_(
                    ReviewModel.article_id == article_id,
                    ReviewModel.reviewer_id == reviewer_id
                )
            )
        )
        return result.scalar_one_or_none() is not None

    async def list_by_reviewer(self, reviewer_id: int) -> List["ReviewSummary"]:
        """Рецензии рецензента с названиями статей"""
        from app.domains.reviews.entities import ReviewSummary

        result = await self.session.execute(
            select(ReviewModel, ArticleModel.title)
            .join(ArticleModel, ArticleModel.id == ReviewModel.article_id)
            .where(ReviewModel.reviewer_id == reviewer_id)
            .order_by(ReviewModel.id)
        )
        return [
            ReviewSummary(
                id=db_review.id,
                content=db_review.content,
                status=db_review.status,
                review_date=db_review.review_date,
                article_id=db_review.article_id,
                article_title=article_title
            )
            for db_review, article_title in result.all()
        ]

    def _to_domain(self, db_review: ReviewModel) -> "Review":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.reviews.entities import Review

        return Review(
            id=db_review.id,
            content=db_review.content,
            status=db_review.status,
            reviewer_id=db_review.reviewer_id,
            article_id=db_review.article_id,
            review_date=db_review.review_date
        )
