from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime

from app.domains.articles.entities import ReviewDecision


class ReviewCreate(BaseModel):
    """Схема для создания рецензии"""
    article_id: int
    content: str = Field(..., min_length=1)
    # Строка, чтобы неизвестное решение давало 400, а не 422
    status: str


class ReviewResponse(BaseModel):
    """Схема рецензии в списке рецензента"""
    id: int
    content: str
    status: ReviewDecision
    review_date: datetime
    article_title: str
    article_id: int

    model_config = ConfigDict(from_attributes=True)


class ReviewCreatedResponse(BaseModel):
    message: str
    review_id: int
