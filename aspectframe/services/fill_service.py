"""Заливка холста: сплошной цвет и три вида градиента.

Принципы:
- SRP: только растр заливки; геометрия холста считается в сервисе компоновки.
- OCP: новый вид заливки — новый вариант `FillSpec` и новая ветка `match`.
"""
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageColor

from aspectframe.config import CONFIG
from aspectframe.logger import get_logger
from aspectframe.models.fill_model import (
    DiagonalGradientFill,
    LinearGradientFill,
    RadialGradientFill,
    SolidFill,
    normalize_hex,
)
from aspectframe.services.render_service import RenderSurface

logger = get_logger(__name__)


class FillRenderer:
    """Заливает весь холст до того, как на него будет нанесено изображение."""

    def __init__(self, fallback_color: str = CONFIG['border']['default_color']) -> None:
        self._fallback_color = normalize_hex(fallback_color)

    def paint(
        self, surface: RenderSurface, width: int, height: int, fill: object, fallback: Optional[str] = None
    ) -> None:
        """
        Заливка прямоугольника (0, 0, width, height) согласно `fill`.
        Неизвестный вид заливки рисуется сплошным цветом `fallback`
        (цвет рамки из сессии), а без него — цветом рамки по умолчанию.
        """
        match fill:
            case SolidFill(color=color):
                surface.fill_solid(color)
            case LinearGradientFill(color_a=a, color_b=b):
                surface.fill_raster(self.linear_gradient(width, height, a, b))
            case RadialGradientFill(color_a=a, color_b=b):
                surface.fill_raster(self.radial_gradient(width, height, a, b))
            case DiagonalGradientFill(color_a=a, color_b=b):
                surface.fill_raster(self.diagonal_gradient(width, height, a, b))
            case _:
                color = normalize_hex(fallback) if fallback is not None else self._fallback_color
                logger.warning(f"Unknown fill {fill!r}, falling back to solid {color}")
                surface.fill_solid(color)

    # ---------- Градиенты ----------
    def linear_gradient(self, width: int, height: int, color_a: str, color_b: str) -> Image.Image:
        """Вектор (0, 0) -> (width, 0): t = x / width."""
        xs, ys = self._pixel_centers(width, height)
        t = np.broadcast_to(xs / width, (height, width))
        return self._interpolate(t, color_a, color_b)

    def radial_gradient(self, width: int, height: int, color_a: str, color_b: str) -> Image.Image:
        """Окружности из центра холста: радиус 0 -> color_a, max(width, height) -> color_b."""
        xs, ys = self._pixel_centers(width, height)
        dist = np.hypot(xs - width / 2.0, ys - height / 2.0)
        t = dist / float(max(width, height))
        return self._interpolate(t, color_a, color_b)

    def diagonal_gradient(self, width: int, height: int, color_a: str, color_b: str) -> Image.Image:
        """Вектор (0, 0) -> (width, height): t — проекция точки на вектор."""
        xs, ys = self._pixel_centers(width, height)
        t = (xs * width + ys * height) / float(width * width + height * height)
        return self._interpolate(t, color_a, color_b)

    # ---------- Вспомогательные функции ----------
    def _pixel_centers(self, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Координаты центров пикселей: xs формы (1, W), ys формы (H, 1).
        """
        xs = (np.arange(width, dtype=np.float64) + 0.5).reshape(1, width)
        ys = (np.arange(height, dtype=np.float64) + 0.5).reshape(height, 1)
        return xs, ys

    def _interpolate(self, t: np.ndarray, color_a: str, color_b: str) -> Image.Image:
        """
        Линейная интерполяция RGB между двумя цветами, t обрезается до [0, 1].
        """
        a = np.array(ImageColor.getrgb(color_a)[:3], dtype=np.float64)
        b = np.array(ImageColor.getrgb(color_b)[:3], dtype=np.float64)
        tt = np.clip(t, 0.0, 1.0)[..., np.newaxis]
        rgb = a + (b - a) * tt
        out = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
        return Image.fromarray(np.ascontiguousarray(out)).convert("RGBA")
