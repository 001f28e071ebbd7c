from app.db.models.user import User
from app.db.models.article import Article
from app.db.models.review import Review

__all__ = [
    "User",
    "Article",
    "Review"
]
