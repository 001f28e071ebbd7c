from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError
from app.db.models.user import User as UserModel
from app.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
            is_blocked=user.is_blocked
        )

        self.session.add(db_user)
        try:
            await self.session.flush()
            await self.session.refresh(db_user)
            await self.session.commit()
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("User with this email or username already exists")

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Получение пользователя по id"""
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_username(self, username: str) -> Optional[User]:
        """Получение пользователя по username"""
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.username == username)
            .execution_options(populate_existing=True)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def set_blocked(self, user_id: int, is_blocked: bool) -> None:
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(is_blocked=is_blocked)
        )
        await self.session.commit()

    async def delete(self, user_id: int) -> bool:
        """Удаление пользователя, статьи и рецензии удаляются каскадно в БД"""
        stmt = delete(UserModel).where(UserModel.id == user_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def get_all(self) -> List[User]:
        """Получение списка пользователей"""
        result = await self.session.execute(
            select(UserModel).order_by(UserModel.id)
        )
        db_users = result.scalars().all()
        return [self._to_domain(user) for user in db_users]

    async def email_exists(self, email: str) -> bool:
        """Проверка существования email"""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email)
        )
        return result.scalar_one_or_none() is not None

    async def username_exists(self, username: str) -> bool:
        """Проверка существования username"""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.username == username)
        )
        return result.scalar_one_or_none() is not None

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            id=db_user.id,
            username=db_user.username,
            email=db_user.email,
            password_hash=db_user.password_hash,
            role=db_user.role,
            is_blocked=db_user.is_blocked
        )
