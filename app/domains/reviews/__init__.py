from app.domains.reviews.entities import Review, ReviewSummary
from app.domains.reviews.schemas import ReviewCreate, ReviewResponse, ReviewCreatedResponse

__all__ = [
    "Review", "ReviewSummary",
    "ReviewCreate", "ReviewResponse", "ReviewCreatedResponse"
]
