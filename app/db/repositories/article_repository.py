from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_, exists

from app.db.models.article import Article as ArticleModel
from app.db.models.review import Review as ReviewModel
from app.db.models.user import User as UserModel
from app.domains.articles.entities import ArticleStatus

if TYPE_CHECKING:
    from app.domains.articles.entities import Article, ArticleSummary, ArticleDetail


class ArticleRepository:
    """Репозиторий для работы со статьями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _summary_query(self):
        return (
            select(ArticleModel, UserModel.username)
            .join(UserModel, UserModel.id == ArticleModel.author_id)
            .order_by(ArticleModel.id)
            .execution_options(populate_existing=True)
        )

    async def create(self, article: "Article") -> "Article":
        """Создание новой статьи"""
        db_article = ArticleModel(
            title=article.title,
            file_path=article.file_path,
            submission_date=article.submission_date,
            status=article.status,
            author_id=article.author_id
        )

        self.session.add(db_article)
        await self.session.flush()
        await self.session.refresh(db_article)
        await self.session.commit()
        return self._to_domain(db_article)

    async def get_by_id(self, article_id: int, for_update: bool = False) -> Optional["Article"]:
        """Получение статьи по id, при for_update строка блокируется до конца транзакции"""
        stmt = (
            select(ArticleModel)
            .where(ArticleModel.id == article_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        db_article = result.scalar_one_or_none()
        return self._to_domain(db_article) if db_article else None

    async def list_summaries(self, author_id: Optional[int] = None) -> List["ArticleSummary"]:
        """Список статей с именем автора, при author_id только статьи этого автора"""
        stmt = self._summary_query()
        if author_id is not None:
            stmt = stmt.where(ArticleModel.author_id == author_id)

        result = await self.session.execute(stmt)
        return [self._to_summary(db_article, author_name) for db_article, author_name in result.all()]

    async def list_available_for(self, reviewer_id: int) -> List["ArticleSummary"]:
        """Статьи без решения, которые рецензент еще не оценивал"""
        already_reviewed = exists().where(
            and_(
                ReviewModel.article_id == ArticleModel.id,
                ReviewModel.reviewer_id == reviewer_id
            )
        )
        stmt = self._summary_query().where(
            and_(
                ArticleModel.status == ArticleStatus.NOT_REVIEWED,
                ~already_reviewed
            )
        )

        result = await self.session.execute(stmt)
        return [self._to_summary(db_article, author_name) for db_article, author_name in result.all()]

    async def get_detail(self, article_id: int) -> Optional["ArticleDetail"]:
        """Статья вместе с автором и рецензиями"""
        from app.domains.articles.entities import ArticleDetail, ArticleReviewView

        result = await self.session.execute(
            select(ArticleModel, UserModel.username)
            .join(UserModel, UserModel.id == ArticleModel.author_id)
            .where(ArticleModel.id == article_id)
            .execution_options(populate_existing=True)
        )
        row = result.one_or_none()
        if row is None:
            return None
        db_article, author_name = row

        reviews_result = await self.session.execute(
            select(ReviewModel, UserModel.username)
            .join(UserModel, UserModel.id == ReviewModel.reviewer_id)
            .where(ReviewModel.article_id == article_id)
            .order_by(ReviewModel.id)
        )
        reviews = [
            ArticleReviewView(
                id=db_review.id,
                content=db_review.content,
                status=db_review.status,
                review_date=db_review.review_date,
                reviewer_id=db_review.reviewer_id,
                reviewer_name=reviewer_name
            )
            for db_review, reviewer_name in reviews_result.all()
        ]

        return ArticleDetail(
            id=db_article.id,
            title=db_article.title,
            status=db_article.status,
            submission_date=db_article.submission_date,
            author_id=db_article.author_id,
            author_name=author_name,
            file_path=db_article.file_path,
            reviews=reviews
        )

    async def mark_decided(self, article_id: int, status: ArticleStatus) -> bool:
        """Установка итогового статуса, только из NotReviewed. Без commit"""
        result = await self.session.execute(
            update(ArticleModel)
            .where(
                and_(
                    ArticleModel.id == article_id,
                    ArticleModel.status == ArticleStatus.NOT_REVIEWED
                )
            )
            .values(status=status)
        )
        return result.rowcount == 1

    async def list_file_paths_by_author(self, author_id: int) -> List[str]:
        result = await self.session.execute(
            select(ArticleModel.file_path).where(ArticleModel.author_id == author_id)
        )
        return list(result.scalars().all())

    async def delete(self, article_id: int) -> bool:
        """Удаление статьи, рецензии удаляются каскадно в БД"""
        stmt = delete(ArticleModel).where(ArticleModel.id == article_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_summary(self, db_article: ArticleModel, author_name: str) -> "ArticleSummary":
        from app.domains.articles.entities import ArticleSummary

        return ArticleSummary(
            id=db_article.id,
            title=db_article.title,
            status=db_article.status,
            submission_date=db_article.submission_date,
            author_id=db_article.author_id,
            author_name=author_name
        )

    def _to_domain(self, db_article: ArticleModel) -> "Article":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.articles.entities import Article

        return Article(
            id=db_article.id,
            title=db_article.title,
            file_path=db_article.file_path,
            author_id=db_article.author_id,
            status=db_article.status,
            submission_date=db_article.submission_date
        )
