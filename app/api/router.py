from fastapi import APIRouter
from app.api.http import health_router, auth_router, users_router, articles_router, reviews_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(articles_router)
api_router.include_router(reviews_router)
