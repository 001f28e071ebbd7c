from app.domains.articles.entities import (
    Article, ArticleAccess, ArticleDetail, ArticleStatus, ArticleSummary,
    ManuscriptUpload, ReviewDecision
)
from app.domains.articles.schemas import (
    ArticleSummaryResponse, AvailableArticleResponse, ArticleReviewResponse,
    ArticleDetailResponse, ArticleSubmittedResponse
)

__all__ = [
    "Article", "ArticleAccess", "ArticleDetail", "ArticleStatus", "ArticleSummary",
    "ManuscriptUpload", "ReviewDecision",
    "ArticleSummaryResponse", "AvailableArticleResponse", "ArticleReviewResponse",
    "ArticleDetailResponse", "ArticleSubmittedResponse"
]
