from sqlalchemy import Column, String, Integer, ForeignKey, Enum
from sqlalchemy.orm import relationship

from app.db.base import BaseModel, UTCDateTime
from app.db.models.user import enum_values
from app.domains.articles.entities import ArticleStatus


class Article(BaseModel):
    __tablename__ = "articles"

    title = Column(String(200), nullable=False)
    file_path = Column(String(255), nullable=False)
    submission_date = Column(UTCDateTime, nullable=False)
    status = Column(
        Enum(ArticleStatus, native_enum=False, length=20, values_callable=enum_values),
        default=ArticleStatus.NOT_REVIEWED,
        index=True,
        nullable=False
    )
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    # Relationships
    author = relationship("User", back_populates="articles")
    reviews = relationship("Review", back_populates="article", cascade="all, delete-orphan", passive_deletes=True)
