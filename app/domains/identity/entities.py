import enum
from dataclasses import dataclass
from typing import Optional
from passlib.context import CryptContext

from app.core.exceptions import ValidationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class Role(str, enum.Enum):
    AUTHOR = "Author"
    REVIEWER = "Reviewer"
    ADMIN = "Admin"

    @classmethod
    def parse(cls, value) -> "Role":
        """Разбор роли из строки, неизвестное значение недопустимо"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError("Invalid role")


# Роли, которые можно выдать через администрирование аккаунтов
ASSIGNABLE_ROLES = (Role.AUTHOR, Role.REVIEWER)


@dataclass(frozen=True)
class Caller:
    """Аутентифицированный вызывающий, передается в каждую операцию явно"""
    id: int
    role: Role
    blocked: bool = False


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: Optional[int],
        username: str,
        email: str,
        password_hash: str,
        role: Role,
        is_blocked: bool = False
    ):
        self.id = id
        self.username = username
        self.email = email
        self.password_hash = password_hash
        self.role = role
        self.is_blocked = is_blocked

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return pwd_context.verify(password[:72], self.password_hash)

    def toggle_block(self) -> bool:
        """Переключение блокировки, возвращает новое состояние"""
        self.is_blocked = not self.is_blocked
        return self.is_blocked

    def as_caller(self) -> Caller:
        return Caller(id=self.id, role=self.role, blocked=self.is_blocked)

    @classmethod
    def create_user(cls, username: str, email: str, password: str, role: Role) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        # bcrypt имеет ограничение 72 байта, обрезаем пароль если нужно
        password_hash = pwd_context.hash(password[:72])

        return cls(
            id=None,
            username=username,
            email=email,
            password_hash=password_hash,
            role=role
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, role={self.role.value})"
