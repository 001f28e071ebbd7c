from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_caller
from app.core.db import get_db
from app.domains.identity.entities import Caller
from app.domains.identity.schemas import UserLogin, UserResponse, Token
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя"""
    identity_service = IdentityService(db)

    token = await identity_service.login_user(login_data.username, login_data.password)

    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Получение информации о текущем пользователе"""
    identity_service = IdentityService(db)

    user = await identity_service.get_user(caller.id)

    return UserResponse.model_validate(user)
