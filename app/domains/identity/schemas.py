from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from typing import Optional

from app.domains.identity.entities import Role


class UserBase(BaseModel):
    """Базовая схема пользователя"""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr = Field(..., max_length=100)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        if not v.strip():
            raise ValueError('Username cannot be empty')
        return v.strip()


class UserCreate(UserBase):
    """Схема для создания пользователя администратором"""
    password: str = Field(..., min_length=1, max_length=128)
    # Роль разбирается в сервисе, чтобы вернуть 400 "Invalid role"
    role: str


class UserLogin(BaseModel):
    """Схема для входа пользователя"""
    username: str
    password: str


class UserResponse(BaseModel):
    """Схема для ответа с данными пользователя"""
    id: int
    username: str
    email: str
    role: Role
    is_blocked: bool

    model_config = ConfigDict(from_attributes=True)


class UserCreatedResponse(BaseModel):
    message: str
    user_id: int


class MessageResponse(BaseModel):
    message: str


class Token(BaseModel):
    """Схема для JWT токена"""
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Схема для данных из JWT токена"""
    user_id: Optional[int] = None
    role: Optional[Role] = None
