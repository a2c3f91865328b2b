"""Состояние сессии: текущее изображение и параметры рамки.

Передаётся явно в сервис компоновки вместо глобального состояния UI.
Изображение заменяется целиком, а не изменяется на месте.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from aspectframe.config import CONFIG
from aspectframe.models.fill_model import FillSpec, fill_from_style, normalize_hex
from aspectframe.models.image_model import ImageSource
from aspectframe.models.plan_model import ProcessedImage


@dataclass
class SessionState:
    image: Optional[ImageSource] = None
    fill_style: str = CONFIG['fill']['default_style']
    border_color: str = CONFIG['border']['default_color']
    gradient_color_a: str = CONFIG['fill']['gradient_color_a']
    gradient_color_b: str = CONFIG['fill']['gradient_color_b']
    border_width: int = CONFIG['border']['default_width']
    processed: Optional[ProcessedImage] = field(default=None, repr=False)

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def replace_image(self, image: ImageSource) -> None:
        """Подменяет изображение; прежний результат обработки сбрасывается."""
        self.image = image
        self.processed = None

    def set_border_width(self, width: int) -> int:
        """Устанавливает толщину рамки, ограничивая её диапазоном UI."""
        lo = CONFIG['border']['min_width']
        hi = CONFIG['border']['max_width']
        self.border_width = max(lo, min(hi, int(width)))
        return self.border_width

    def set_border_color(self, color: str) -> None:
        self.border_color = normalize_hex(color)

    def set_gradient_colors(self, color_a: Optional[str] = None, color_b: Optional[str] = None) -> None:
        if color_a is not None:
            self.gradient_color_a = normalize_hex(color_a)
        if color_b is not None:
            self.gradient_color_b = normalize_hex(color_b)

    def fill_spec(self) -> FillSpec:
        return fill_from_style(self.fill_style, self.border_color, self.gradient_color_a, self.gradient_color_b)
