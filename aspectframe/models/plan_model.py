"""План компоновки и результат обработки.

План вычисляется заново на каждый запрос и нигде не хранится частично.
Геометрия точная (дробная); округление до пикселей одно на всё приложение:
половина округляется вверх (`round_px`).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from io import BytesIO
from typing import Tuple

from PIL import Image

from aspectframe.config import CONFIG
from aspectframe.models.fill_model import FillSpec


def round_px(value: float) -> int:
    """Округление до целого пикселя, половина вверх (в т.ч. для отрицательных)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class CompositionPlan:
    """Размер холста, положение исходного изображения и заливка.

    Fields:
        canvas_width, canvas_height: Размер холста вместе с рамкой, px (дробные).
        draw_x, draw_y: Левый верхний угол исходного изображения; может быть < 0,
            если изображение выходит за внутреннюю рамку.
        draw_width, draw_height: Нативный размер исходного изображения.
        border_width: Толщина рамки, px.
        target_ratio: Пропорция внутренней области (без рамки).
        fill: Заливка холста.
    """
    canvas_width: float
    canvas_height: float
    draw_x: float
    draw_y: float
    draw_width: int
    draw_height: int
    border_width: int
    target_ratio: float
    fill: FillSpec

    @property
    def inner_width(self) -> float:
        return self.canvas_width - 2 * self.border_width

    @property
    def inner_height(self) -> float:
        return self.canvas_height - 2 * self.border_width

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return round_px(self.canvas_width), round_px(self.canvas_height)

    @property
    def pixel_offset(self) -> Tuple[int, int]:
        return round_px(self.draw_x), round_px(self.draw_y)


@dataclass(frozen=True)
class ProcessedImage:
    """Закодированный PNG вместе с планом, по которому он построен."""
    data: bytes
    plan: CompositionPlan
    filename: str = CONFIG['export']['default_filename']

    @property
    def size(self) -> Tuple[int, int]:
        return self.plan.pixel_size

    def to_image(self) -> Image.Image:
        """Декодирует PNG для предпросмотра."""
        image = Image.open(BytesIO(self.data))
        image.load()
        return image
