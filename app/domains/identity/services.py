import logging
from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.core.security import create_access_token, verify_token
from app.db.repositories.article_repository import ArticleRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.access import require_role
from app.domains.identity.entities import ASSIGNABLE_ROLES, Caller, Role, User
from app.domains.identity.schemas import TokenData
from app.infrastructure.storage import LocalFileStorage

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 50
MAX_EMAIL_LENGTH = 100


def clean_account_fields(username: str, email: str) -> Tuple[str, str]:
    """Обрезка пробелов и проверка длины имени пользователя и email"""
    username = (username or "").strip()
    email = (email or "").strip()

    if not username:
        raise ValidationError("Username is required")
    if len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")
    if not email:
        raise ValidationError("Email is required")
    if len(email) > MAX_EMAIL_LENGTH:
        raise ValidationError(f"Email must be at most {MAX_EMAIL_LENGTH} characters")

    return username, email


class IdentityService:
    """Сервис аутентификации: вход и проверка токенов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """Аутентификация пользователя по имени и паролю"""
        user = await self.user_repository.get_by_username(username)

        if not user or not user.authenticate(password):
            return None

        return user

    async def login_user(self, username: str, password: str) -> str:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate_user(username, password)

        if not user:
            logger.info("Failed login attempt for username %s", username)
            raise AuthenticationError("Incorrect username or password")

        if user.is_blocked:
            logger.info("Blocked user %s tried to log in", user.id)
            raise AuthenticationError("User is blocked")

        token_data = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value
        }

        return create_access_token(data=token_data)

    async def caller_from_token(self, token: str) -> Caller:
        """Получение вызывающего из JWT токена. Блокировка проверяется по БД"""
        payload = verify_token(token)
        if not payload or payload.get("sub") is None:
            raise AuthenticationError()

        try:
            token_data = TokenData(user_id=int(payload["sub"]), role=payload.get("role"))
        except (TypeError, ValueError):
            raise AuthenticationError()

        user = await self.user_repository.get_by_id(token_data.user_id)
        if user is None:
            raise AuthenticationError()

        if user.is_blocked:
            logger.info("Rejected token of blocked user %s", user.id)
            raise AuthenticationError("User is blocked")

        # Роль берется из БД, а не из токена
        return user.as_caller()

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def bootstrap_admin(self, username: str, email: str, password: str) -> Optional[User]:
        """Создание первого администратора вне API. Повторный вызов ничего не делает"""
        username, email = clean_account_fields(username, email)
        if not password:
            raise ValidationError("Password is required")

        if await self.user_repository.username_exists(username):
            logger.info("Admin bootstrap skipped: user %s already exists", username)
            return None

        if await self.user_repository.email_exists(email):
            raise ConflictError("Email already registered")

        admin = User.create_user(
            username=username,
            email=email,
            password=password,
            role=Role.ADMIN
        )
        created = await self.user_repository.create(admin)
        logger.info("Bootstrapped admin account %s (id=%s)", created.username, created.id)
        return created


class AccountService:
    """Администрирование аккаунтов, доступно только администратору"""

    def __init__(self, session: AsyncSession, storage: Optional[LocalFileStorage] = None):
        self.session = session
        self.user_repository = UserRepository(session)
        self.article_repository = ArticleRepository(session)
        self.storage = storage or LocalFileStorage()

    async def list_users(self, caller: Caller) -> List[User]:
        """Получение списка пользователей"""
        require_role(caller, Role.ADMIN)
        return await self.user_repository.get_all()

    async def create_user(
        self,
        caller: Caller,
        username: str,
        email: str,
        password: str,
        role
    ) -> User:
        """Создание автора или рецензента"""
        require_role(caller, Role.ADMIN)
        username, email = clean_account_fields(username, email)
        if not password:
            raise ValidationError("Password is required")

        if await self.user_repository.email_exists(email):
            raise ConflictError("Email already registered")

        if await self.user_repository.username_exists(username):
            raise ConflictError("Username already taken")

        role = Role.parse(role)
        if role not in ASSIGNABLE_ROLES:
            raise ValidationError("Invalid role")

        user = User.create_user(
            username=username,
            email=email,
            password=password,
            role=role
        )
        created = await self.user_repository.create(user)
        logger.info("Admin %s created %s account %s", caller.id, role.value, created.id)
        return created

    async def toggle_block_user(self, caller: Caller, user_id: int) -> User:
        """Блокировка или разблокировка пользователя"""
        require_role(caller, Role.ADMIN)

        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        user.toggle_block()
        await self.user_repository.set_blocked(user.id, user.is_blocked)
        logger.info("Admin %s %s user %s", caller.id, "blocked" if user.is_blocked else "unblocked", user.id)
        return user

    async def delete_user(self, caller: Caller, user_id: int) -> None:
        """Удаление пользователя вместе с его статьями и рецензиями"""
        require_role(caller, Role.ADMIN)

        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        file_paths = await self.article_repository.list_file_paths_by_author(user.id)
        await self.user_repository.delete(user.id)

        for file_path in file_paths:
            self.storage.delete(file_path)

        logger.info("Admin %s deleted user %s with %d articles", caller.id, user.id, len(file_paths))
