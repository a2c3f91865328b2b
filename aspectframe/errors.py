"""Ошибки приложения.

Все ошибки наследуются от `AspectFrameError`, чтобы контроллер мог показать
пользователю сообщение и оставить сессию в прежнем состоянии.
"""
from __future__ import annotations


class AspectFrameError(Exception):
    """Базовая ошибка приложения."""


class UnsupportedMediaType(AspectFrameError):
    """Выбран файл не JPEG/PNG. Повтор бессмысленен, нужен другой файл."""

    def __init__(self, media_type: str | None, name: str | None = None) -> None:
        self.media_type = media_type
        self.name = name
        shown = name or "файл"
        super().__init__(f"Неподдерживаемый тип ({media_type or 'неизвестен'}): {shown}. Загрузите JPG или PNG")


class DecodeError(AspectFrameError):
    """Файл повреждён или не читается."""


class InvalidInput(AspectFrameError, ValueError):
    """Нарушено предусловие вычисления (например, изображение не загружено)."""
