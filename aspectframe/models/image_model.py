"""Модели данных для изображений и целевых пропорций.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Optional

from PIL import Image


class TargetRatio(Enum):
    """Целевые пропорции (ширина / высота) итогового изображения."""
    SQUARE = Fraction(1, 1)
    PORTRAIT = Fraction(4, 5)
    LANDSCAPE = Fraction(16, 9)

    @property
    def label(self) -> str:
        return _RATIO_LABELS[self]


_RATIO_LABELS = {
    TargetRatio.SQUARE: "Квадрат (1:1)",
    TargetRatio.PORTRAIT: "Портрет (4:5)",
    TargetRatio.LANDSCAPE: "Пейзаж (16:9)",
}


@dataclass(frozen=True)
class ImageSource:
    """Неизменяемая модель декодированного изображения и его метаданные.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        pil_image: Декодированное изображение PIL (RGBA), используется как есть при отрисовке.
        media_type: Заявленный тип, например "image/png".
        name: Имя исходного файла, если известно.
        size_bytes: Размер исходных данных, если доступен.
    """
    width: int
    height: int
    pil_image: Image.Image
    media_type: str
    name: Optional[str] = None
    size_bytes: Optional[int] = None
