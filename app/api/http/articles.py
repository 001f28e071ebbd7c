from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.auth import get_current_caller
from app.core.db import get_db
from app.domains.articles.entities import ManuscriptUpload
from app.domains.articles.schemas import (
    ArticleSummaryResponse, ArticleDetailResponse, ArticleSubmittedResponse
)
from app.domains.articles.services import ArticleService
from app.domains.identity.entities import Caller
from app.domains.identity.schemas import MessageResponse
from app.infrastructure.storage import LocalFileStorage, get_storage

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("", response_model=List[ArticleSummaryResponse])
async def get_articles(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Получение списка статей"""
    article_service = ArticleService(db)

    articles = await article_service.list_articles(caller)

    return [ArticleSummaryResponse.model_validate(article) for article in articles]


@router.post("", response_model=ArticleSubmittedResponse, status_code=status.HTTP_201_CREATED)
async def submit_article(
    title: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage)
):
    """Подача статьи (PDF или DOCX)"""
    article_service = ArticleService(db, storage)

    upload = None
    if file is not None:
        upload = ManuscriptUpload(filename=file.filename, content=await file.read())

    article = await article_service.submit_article(caller, title, upload)

    return ArticleSubmittedResponse(message="Article submitted successfully", article_id=article.id)


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(
    article_id: int,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Получение статьи вместе с рецензиями"""
    article_service = ArticleService(db)

    article = await article_service.get_article(caller, article_id)

    return ArticleDetailResponse.model_validate(article)


@router.delete("/{article_id}", response_model=MessageResponse)
async def delete_article(
    article_id: int,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage)
):
    """Удаление статьи"""
    article_service = ArticleService(db, storage)

    await article_service.delete_article(caller, article_id)

    return MessageResponse(message="Article deleted successfully")
