import logging
import os
import uuid
from typing import Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


class LocalFileStorage:
    """Хранилище рукописей в локальном каталоге под случайными именами"""

    def __init__(self, upload_dir: Optional[str] = None):
        self.upload_dir = upload_dir or settings.upload_dir

    def _ensure_dir(self) -> None:
        if not os.path.exists(self.upload_dir):
            os.makedirs(self.upload_dir, exist_ok=True)
            logger.info("Created upload directory %s", self.upload_dir)

    def path_for(self, reference: str) -> str:
        """Путь к файлу по ссылке. Ссылка не может выходить за каталог"""
        name = os.path.basename(reference)
        if not name or name != reference:
            raise ValueError(f"Invalid blob reference: {reference!r}")
        return os.path.join(self.upload_dir, name)

    def save(self, content: bytes, extension: str) -> str:
        """Сохранение содержимого, возвращает ссылку на файл"""
        self._ensure_dir()
        reference = f"{uuid.uuid4()}{extension}"

        with open(self.path_for(reference), "wb") as stream:
            stream.write(content)

        logger.debug("Stored blob %s (%d bytes)", reference, len(content))
        return reference

    def exists(self, reference: str) -> bool:
        return os.path.exists(self.path_for(reference))

    def delete(self, reference: str) -> bool:
        """Удаление файла. Отсутствующий файл не считается ошибкой"""
        if not self.exists(reference):
            logger.debug("Blob %s already absent", reference)
            return False

        os.remove(self.path_for(reference))
        logger.debug("Deleted blob %s", reference)
        return True


def get_storage() -> LocalFileStorage:
    return LocalFileStorage()
