from sqlalchemy import Column, String, Boolean, Enum
from sqlalchemy.orm import relationship

from app.db.base import BaseModel
from app.domains.identity.entities import Role


def enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(BaseModel):
    __tablename__ = "users"

    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(Role, native_enum=False, length=20, values_callable=enum_values), nullable=False)
    is_blocked = Column(Boolean, default=False, nullable=False)

    # Relationships
    articles = relationship("Article", back_populates="author", cascade="all, delete-orphan", passive_deletes=True)
    reviews = relationship("Review", back_populates="reviewer", cascade="all, delete-orphan", passive_deletes=True)
