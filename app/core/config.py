from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./reviews.db"
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Хранилище рукописей
    upload_dir: str = "uploads"
    allowed_extensions: str = ".pdf,.docx"

    sql_echo: bool = False
    log_level: str = "INFO"
    create_tables_on_startup: bool = True

    # Первичный администратор (создается вне API)
    bootstrap_admin_username: Optional[str] = None
    bootstrap_admin_email: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def allowed_extension_list(self) -> List[str]:
        """Список допустимых расширений файлов в нижнем регистре"""
        extensions = []
        for item in self.allowed_extensions.split(","):
            item = item.strip().lower()
            if not item:
                continue
            extensions.append(item if item.startswith(".") else f".{item}")
        return extensions


settings = Settings()
