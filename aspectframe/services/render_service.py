"""Поверхность отрисовки на базе Pillow и экспорт в PNG.

Принципы:
- SRP: только примитивы рисования (заливка, вставка изображения, экспорт).
- Геометрия и выбор заливки — в сервисах компоновки и заливки.
"""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageColor

from aspectframe.logger import get_logger
from aspectframe.models.plan_model import ProcessedImage

logger = get_logger(__name__)


class RenderSurface:
    """RGBA-холст фиксированного размера."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Размер холста должен быть положительным: {width}x{height}")
        self._image = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Image.Image:
        return self._image

    def fill_solid(self, color: str) -> None:
        r, g, b = ImageColor.getrgb(color)[:3]
        self._image.paste((r, g, b, 255), (0, 0, *self._image.size))

    def fill_raster(self, raster: Image.Image) -> None:
        """Заливка готовым растром (градиент) того же размера, что и холст."""
        if raster.size != self._image.size:
            raise ValueError(f"Растр {raster.size} не совпадает с холстом {self._image.size}")
        self._image.paste(raster.convert("RGBA"), (0, 0))

    def draw_image(self, handle: Image.Image, x: int, y: int, w: int, h: int) -> None:
        """Наносит изображение поверх заливки; выходящие за холст части обрезаются."""
        src = handle if handle.mode == "RGBA" else handle.convert("RGBA")
        if src.size != (w, h):
            src = src.resize((w, h), Image.Resampling.LANCZOS)
        # alpha_composite() rejects negative offsets, so place the source on a full-size layer first
        layer = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        layer.paste(src, (x, y))
        self._image.alpha_composite(layer)

    def export_png(self) -> bytes:
        buf = BytesIO()
        self._image.save(buf, format="PNG")
        return buf.getvalue()


def save_png(processed: ProcessedImage, file_path: str | Path) -> Path:
    """Сохраняет результат на диск (аналог «скачать»)."""
    path = Path(file_path)
    path.write_bytes(processed.data)
    logger.info(f"Saved {processed.size[0]}x{processed.size[1]} PNG to {path}")
    return path
