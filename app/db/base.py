from datetime import timezone

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

# Базовый класс для моделей
Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """DateTime, который всегда возвращается с tzinfo=UTC.

    SQLite хранит дату без смещения, поэтому при чтении смещение
    восстанавливается, а при записи значение приводится к UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class BaseModel(Base):
    """Абстрактная модель с целочисленным первичным ключом"""

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
