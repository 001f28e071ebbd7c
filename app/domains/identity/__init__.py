from app.domains.identity.entities import Caller, Role, User
from app.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserResponse,
    UserCreatedResponse, MessageResponse, Token, TokenData
)

__all__ = [
    "Caller", "Role", "User",
    "UserBase", "UserCreate", "UserLogin", "UserResponse",
    "UserCreatedResponse", "MessageResponse", "Token", "TokenData"
]
