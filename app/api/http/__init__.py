from app.api.http.health import router as health_router
from app.api.http.auth import router as auth_router
from app.api.http.users import router as users_router
from app.api.http.articles import router as articles_router
from app.api.http.reviews import router as reviews_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "articles_router",
    "reviews_router"
]
