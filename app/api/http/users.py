from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.auth import get_current_caller
from app.core.db import get_db
from app.domains.identity.entities import Caller
from app.domains.identity.schemas import (
    UserCreate, UserResponse, UserCreatedResponse, MessageResponse
)
from app.domains.identity.services import AccountService
from app.infrastructure.storage import LocalFileStorage, get_storage

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
async def get_users(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Получение списка пользователей"""
    account_service = AccountService(db)

    users = await account_service.list_users(caller)

    return [UserResponse.model_validate(user) for user in users]


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Создание автора или рецензента"""
    account_service = AccountService(db)

    user = await account_service.create_user(
        caller,
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role
    )

    return UserCreatedResponse(message="User created successfully", user_id=user.id)


@router.put("/{user_id}/block", response_model=MessageResponse)
async def toggle_block_user(
    user_id: int,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Блокировка или разблокировка пользователя"""
    account_service = AccountService(db)

    user = await account_service.toggle_block_user(caller, user_id)

    state = "blocked" if user.is_blocked else "unblocked"
    return MessageResponse(message=f"User {state} successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage)
):
    """Удаление пользователя"""
    account_service = AccountService(db, storage)

    await account_service.delete_user(caller, user_id)

    return MessageResponse(message="User deleted successfully")
