from app.db.repositories.user_repository import UserRepository
from app.db.repositories.article_repository import ArticleRepository
from app.db.repositories.review_repository import ReviewRepository

__all__ = [
    "UserRepository",
    "ArticleRepository",
    "ReviewRepository"
]
