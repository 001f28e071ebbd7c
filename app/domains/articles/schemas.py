from pydantic import BaseModel, ConfigDict
from typing import List
from datetime import datetime

from app.domains.articles.entities import ArticleStatus, ReviewDecision


class ArticleSummaryResponse(BaseModel):
    """Схема статьи в списке"""
    id: int
    title: str
    status: ArticleStatus
    submission_date: datetime
    author_name: str

    model_config = ConfigDict(from_attributes=True)


class AvailableArticleResponse(BaseModel):
    """Схема статьи, доступной для рецензирования"""
    id: int
    title: str
    submission_date: datetime
    author_name: str

    model_config = ConfigDict(from_attributes=True)


class ArticleReviewResponse(BaseModel):
    id: int
    content: str
    status: ReviewDecision
    review_date: datetime
    reviewer_name: str

    model_config = ConfigDict(from_attributes=True)


class ArticleDetailResponse(BaseModel):
    """Схема статьи вместе с рецензиями"""
    id: int
    title: str
    status: ArticleStatus
    submission_date: datetime
    author_name: str
    reviews: List[ArticleReviewResponse]

    model_config = ConfigDict(from_attributes=True)


class ArticleSubmittedResponse(BaseModel):
    message: str
    article_id: int
