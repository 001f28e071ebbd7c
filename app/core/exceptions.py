from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class ReviewServiceError(Exception):
    """Базовая ошибка доменного уровня"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthenticationError(ReviewServiceError):
    """Нет действительной личности вызывающего"""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"


class AuthorizationError(ReviewServiceError):
    """Личность подтверждена, но роли или владения недостаточно"""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You don't have permission to perform this action"


class ValidationError(ReviewServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class NotFoundError(ReviewServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(ReviewServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


async def review_service_error_handler(request: Request, exc: ReviewServiceError) -> JSONResponse:
    """Преобразование доменной ошибки в HTTP ответ"""
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReviewServiceError, review_service_error_handler)
