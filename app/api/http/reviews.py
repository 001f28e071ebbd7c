from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.auth import get_current_caller
from app.core.db import get_db
from app.domains.articles.schemas import AvailableArticleResponse
from app.domains.identity.entities import Caller
from app.domains.reviews.schemas import ReviewCreate, ReviewResponse, ReviewCreatedResponse
from app.domains.reviews.services import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("", response_model=List[ReviewResponse])
async def get_my_reviews(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Рецензии текущего рецензента"""
    review_service = ReviewService(db)

    reviews = await review_service.list_my_reviews(caller)

    return [ReviewResponse.model_validate(review) for review in reviews]


@router.post("", response_model=ReviewCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_data: ReviewCreate,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Рецензия на статью, решение становится статусом статьи"""
    review_service = ReviewService(db)

    review = await review_service.create_review(
        caller,
        article_id=review_data.article_id,
        content=review_data.content,
        decision=review_data.status
    )

    return ReviewCreatedResponse(message="Review submitted successfully", review_id=review.id)


@router.get("/available-articles", response_model=List[AvailableArticleResponse])
async def get_available_articles(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Статьи, ожидающие решения этого рецензента"""
    review_service = ReviewService(db)

    articles = await review_service.list_available_articles(caller)

    return [AvailableArticleResponse.model_validate(article) for article in articles]
