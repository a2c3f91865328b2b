"""Загрузка изображений: проверка типа, декодирование, асинхронная загрузка.

Принципы:
- SRP: `ImageService` только проверяет тип и декодирует; `ImageLoader` только
  управляет фоновым декодированием и отбрасывает устаревшие результаты.
- LSP/ISP: возвращает `ImageSource` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import mimetypes
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from aspectframe.config import CONFIG
from aspectframe.errors import DecodeError, UnsupportedMediaType
from aspectframe.logger import get_logger
from aspectframe.models.image_model import ImageSource

logger = get_logger(__name__)


def guess_media_type(file_path: str | Path) -> Optional[str]:
    """Заявленный тип файла по его имени (как у браузерного `File.type`)."""
    media_type, _encoding = mimetypes.guess_type(str(file_path))
    return media_type


class ImageService:
    def check_media_type(self, media_type: Optional[str], name: Optional[str] = None) -> None:
        """
        Raises:
            UnsupportedMediaType: если тип не из списка разрешённых (JPEG, PNG).
        """
        if media_type not in CONFIG['upload']['allowed_media_types']:
            raise UnsupportedMediaType(media_type, name)

    def decode(self, blob: bytes, media_type: Optional[str], name: Optional[str] = None) -> ImageSource:
        """Декодирует содержимое файла в `ImageSource`.

        Args:
            blob: Сырые байты файла.
            media_type: Заявленный тип ("image/jpeg" | "image/png").
            name: Имя файла для сообщений и метаданных.

        Returns:
            `ImageSource` c `PIL.Image.Image` в режиме RGBA.

        Raises:
            UnsupportedMediaType: если тип не JPEG/PNG.
            DecodeError: если данные повреждены или не являются JPEG/PNG.
        """
        self.check_media_type(media_type, name)
        try:
            with Image.open(BytesIO(blob), formats=list(CONFIG['upload']['decode_formats'])) as img:
                img.load()
                pil_image = img.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Не удалось прочитать изображение: {name or 'файл'}") from exc

        width, height = pil_image.size
        if width <= 0 or height <= 0:
            raise DecodeError(f"Пустое изображение: {name or 'файл'}")

        logger.info(f"Decoded {name or '<blob>'} ({media_type}): {width}x{height}")
        return ImageSource(
            width=width,
            height=height,
            pil_image=pil_image,
            media_type=media_type,
            name=name,
            size_bytes=len(blob),
        )

    def load_image(self, file_path: str | Path) -> ImageSource:
        """Читает файл с диска и декодирует его.

        Raises:
            UnsupportedMediaType: если расширение не соответствует JPEG/PNG.
            DecodeError: если файл не найден, не читается или повреждён.
        """
        path = Path(file_path)
        media_type = guess_media_type(path)
        self.check_media_type(media_type, path.name)
        if not path.exists() or not path.is_file():
            raise DecodeError(f"Файл не найден: {path}")
        try:
            blob = path.read_bytes()
        except OSError as exc:
            raise DecodeError(f"Не удалось прочитать файл: {path}") from exc
        return self.decode(blob, media_type, path.name)


@dataclass(frozen=True)
class DecodeTicket:
    """Квитанция фоновой загрузки: номер поколения и future с результатом."""
    generation: int
    name: str
    future: Future

    def done(self) -> bool:
        return self.future.done()


class ImageLoader:
    """Фоновое декодирование с семантикой «последний выигрывает».

    Каждая новая загрузка увеличивает поколение; результат применяется,
    только если его квитанция всё ещё последняя. Повторов нет.
    """

    def __init__(self, image_service: Optional[ImageService] = None, executor: Optional[Executor] = None) -> None:
        self._image_service = image_service or ImageService()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=CONFIG['upload']['decode_workers'], thread_name_prefix="decode"
        )
        self._lock = threading.Lock()
        self._generation = 0
        self._latest: Optional[DecodeTicket] = None

    def submit(self, file_path: str | Path) -> DecodeTicket:
        """Запускает декодирование файла.

        Тип проверяется сразу: отклонённый файл не отменяет уже идущую загрузку.
        Принятый файл отменяет предыдущую загрузку, если она ещё не началась.

        Raises:
            UnsupportedMediaType: если файл не JPEG/PNG.
        """
        path = Path(file_path)
        self._image_service.check_media_type(guess_media_type(path), path.name)
        with self._lock:
            self._generation += 1
            generation = self._generation
            previous = self._latest
            future = self._executor.submit(self._image_service.load_image, path)
            ticket = DecodeTicket(generation=generation, name=path.name, future=future)
            self._latest = ticket
        if previous is not None and previous.future.cancel():
            logger.debug(f"Decode #{previous.generation} ({previous.name}) cancelled before start")
        logger.debug(f"Decode #{generation} submitted for {path.name}")
        return ticket

    def is_current(self, ticket: DecodeTicket) -> bool:
        with self._lock:
            return ticket.generation == self._generation

    def resolve(self, ticket: DecodeTicket, timeout: Optional[float] = None) -> Optional[ImageSource]:
        """Возвращает результат загрузки, если квитанция актуальна.

        Returns:
            `ImageSource` или None, если после этой загрузки была начата более новая
            (или загрузка была отменена, не успев начаться).

        Raises:
            DecodeError: если актуальная загрузка завершилась ошибкой.
        """
        try:
            image = ticket.future.result(timeout=timeout)
        except CancelledError:
            logger.info(f"Decode #{ticket.generation} ({ticket.name}) was cancelled before start")
            return None
        except DecodeError:
            if not self.is_current(ticket):
                logger.info(f"Discarding failed stale decode #{ticket.generation} ({ticket.name})")
                return None
            raise
        if not self.is_current(ticket):
            logger.info(f"Discarding stale decode #{ticket.generation} ({ticket.name})")
            return None
        return image

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
