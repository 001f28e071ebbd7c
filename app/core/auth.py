from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.exceptions import AuthenticationError
from app.domains.identity.entities import Caller
from app.domains.identity.services import IdentityService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> Caller:
    """Зависимость для получения вызывающего из bearer токена"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    identity_service = IdentityService(db)
    return await identity_service.caller_from_token(credentials.credentials)
