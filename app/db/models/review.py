from sqlalchemy import Column, Text, Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import BaseModel, UTCDateTime
from app.db.models.user import enum_values
from app.domains.articles.entities import ReviewDecision


class Review(BaseModel):
    __tablename__ = "reviews"
    __table_args__ = (
        # Один рецензент - одна рецензия на статью
        UniqueConstraint("article_id", "reviewer_id", name="uq_reviews_article_reviewer"),
    )

    content = Column(Text, nullable=False)
    status = Column(Enum(ReviewDecision, native_enum=False, length=20, values_callable=enum_values), nullable=False)
    review_date = Column(UTCDateTime, nullable=False)
    reviewer_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), index=True, nullable=False)

    # Relationships
    reviewer = relationship("User", back_populates="reviews")
    article = relationship("Article", back_populates="reviews")
