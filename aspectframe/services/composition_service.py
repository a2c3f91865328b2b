"""Компоновка: холст целевых пропорций с рамкой вокруг исходного изображения.

Принципы:
- SRP: `compute_plan` — чистая функция геометрии, без отрисовки и состояния.
- DIP: `CompositionService` получает рендерер заливки извне; поверхность
  создаётся под каждый запрос и не переиспользуется.

Правило выбора базы (одно для всех случаев):
- исходник относительно шире цели -> внутренняя высота = нативной высоте,
  ширина = высота * ratio (изображение выходит за рамку по горизонтали);
- иначе -> внутренняя ширина = нативной ширине, высота = ширина / ratio.
Изображение никогда не масштабируется и всегда центрируется на холсте.
"""
from __future__ import annotations

import math
from fractions import Fraction
from typing import Optional, Union

from aspectframe.errors import InvalidInput
from aspectframe.logger import get_logger
from aspectframe.models.fill_model import FillSpec
from aspectframe.models.image_model import ImageSource, TargetRatio
from aspectframe.models.plan_model import CompositionPlan, ProcessedImage
from aspectframe.models.session_model import SessionState
from aspectframe.services.fill_service import FillRenderer
from aspectframe.services.render_service import RenderSurface

logger = get_logger(__name__)

RatioLike = Union[TargetRatio, Fraction, int, float]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_fraction(ratio: RatioLike) -> Fraction:
    if isinstance(ratio, TargetRatio):
        return ratio.value
    if isinstance(ratio, bool) or not isinstance(ratio, (int, float, Fraction)):
        raise InvalidInput(f"Пропорция должна быть числом или TargetRatio: {ratio!r}")
    if isinstance(ratio, float) and not math.isfinite(ratio):
        raise InvalidInput(f"Пропорция должна быть конечной: {ratio!r}")
    value = Fraction(ratio)
    if value <= 0:
        raise InvalidInput(f"Пропорция должна быть > 0: {ratio!r}")
    return value


def compute_plan(
    source_width: int,
    source_height: int,
    target_ratio: RatioLike,
    border_width: int,
    fill: FillSpec,
) -> CompositionPlan:
    """Вычисляет размер холста и положение изображения.

    Args:
        source_width, source_height: Нативный размер исходника, px (> 0).
        target_ratio: Пропорция внутренней области (без рамки), > 0.
        border_width: Толщина рамки со всех сторон, px (>= 0).
        fill: Заливка; на геометрию не влияет и передаётся в план как есть.

    Returns:
        `CompositionPlan` с точной (дробной) геометрией.

    Raises:
        InvalidInput: если нарушено любое из предусловий.
    """
    if not _is_int(source_width) or source_width <= 0:
        raise InvalidInput(f"Ширина исходника должна быть целым > 0: {source_width!r}")
    if not _is_int(source_height) or source_height <= 0:
        raise InvalidInput(f"Высота исходника должна быть целым > 0: {source_height!r}")
    if not _is_int(border_width) or border_width < 0:
        raise InvalidInput(f"Толщина рамки должна быть целым >= 0: {border_width!r}")
    ratio = _as_fraction(target_ratio)

    original_ratio = Fraction(source_width, source_height)
    if original_ratio > ratio:
        inner_height = Fraction(source_height)
        inner_width = inner_height * ratio
    else:
        inner_width = Fraction(source_width)
        inner_height = inner_width / ratio

    canvas_width = float(inner_width + 2 * border_width)
    canvas_height = float(inner_height + 2 * border_width)

    plan = CompositionPlan(
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        draw_x=(canvas_width - source_width) / 2,
        draw_y=(canvas_height - source_height) / 2,
        draw_width=source_width,
        draw_height=source_height,
        border_width=border_width,
        target_ratio=float(ratio),
        fill=fill,
    )
    logger.debug(
        f"Plan for {source_width}x{source_height} at ratio {ratio}: "
        f"canvas {canvas_width:g}x{canvas_height:g}, draw at ({plan.draw_x:g}, {plan.draw_y:g})"
    )
    return plan


class CompositionService:
    def __init__(self, fill_renderer: Optional[FillRenderer] = None) -> None:
        self._fill_renderer = fill_renderer or FillRenderer()

    def render(
        self, source: ImageSource, plan: CompositionPlan, fallback_color: Optional[str] = None
    ) -> ProcessedImage:
        """Рисует заливку, затем изображение, и кодирует результат в PNG.

        `fallback_color` заменяет неизвестный вид заливки сплошным цветом.
        """
        width, height = plan.pixel_size
        surface = RenderSurface(width, height)
        self._fill_renderer.paint(surface, width, height, plan.fill, fallback=fallback_color)
        x, y = plan.pixel_offset
        surface.draw_image(source.pil_image, x, y, plan.draw_width, plan.draw_height)
        return ProcessedImage(data=surface.export_png(), plan=plan)

    def process(self, session: SessionState, ratio: RatioLike) -> ProcessedImage:
        """Полный цикл обработки для текущей сессии.

        Результат записывается в `session.processed` только при успехе;
        при ошибке прежний результат остаётся нетронутым.

        Raises:
            InvalidInput: если изображение не загружено или параметры некорректны.
        """
        if session.image is None:
            raise InvalidInput("Сначала загрузите изображение")
        source = session.image
        plan = compute_plan(source.width, source.height, ratio, session.border_width, session.fill_spec())
        processed = self.render(source, plan, fallback_color=session.border_color)
        session.processed = processed
        logger.info(
            f"Processed {source.width}x{source.height} -> {processed.size[0]}x{processed.size[1]} "
            f"(ratio {plan.target_ratio:.4f}, border {plan.border_width}px)"
        )
        return processed
