"""Описание заливки холста (фон/рамка под изображением).

`FillSpec` — размеченное объединение неизменяемых вариантов. Отрисовка
выбирает ветку через `match`, без иерархии классов-рендереров.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from PIL import ImageColor

from aspectframe.errors import InvalidInput


def normalize_hex(color: str) -> str:
    """Приводит "#RGB"/"#RRGGBB" к виду "#RRGGBB" (верхний регистр)."""
    if not isinstance(color, str) or not color.startswith("#") or len(color) not in (4, 7):
        raise InvalidInput(f"Ожидался HEX-цвет вида #RRGGBB: {color!r}")
    try:
        r, g, b = ImageColor.getrgb(color)[:3]
    except ValueError as exc:
        raise InvalidInput(f"Некорректный HEX-цвет: {color!r}") from exc
    return f"#{r:02X}{g:02X}{b:02X}"


class FillStyle(str, Enum):
    SOLID = "solid"
    LINEAR = "gradient-linear"
    RADIAL = "gradient-radial"
    DIAGONAL = "gradient-diagonal"

    @property
    def label(self) -> str:
        # "gradient-linear" -> "Gradient Linear"
        return self.value.replace("-", " ").title()


@dataclass(frozen=True)
class SolidFill:
    color: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", normalize_hex(self.color))


@dataclass(frozen=True)
class _TwoColorFill:
    color_a: str
    color_b: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "color_a", normalize_hex(self.color_a))
        object.__setattr__(self, "color_b", normalize_hex(self.color_b))


@dataclass(frozen=True)
class LinearGradientFill(_TwoColorFill):
    """Горизонтальный градиент: (0, 0) -> (width, 0)."""


@dataclass(frozen=True)
class RadialGradientFill(_TwoColorFill):
    """Радиальный градиент из центра до радиуса max(width, height)."""


@dataclass(frozen=True)
class DiagonalGradientFill(_TwoColorFill):
    """Диагональный градиент: (0, 0) -> (width, height)."""


FillSpec = Union[SolidFill, LinearGradientFill, RadialGradientFill, DiagonalGradientFill]


def fill_from_style(style: str, border_color: str, color_a: str, color_b: str) -> FillSpec:
    """Собирает `FillSpec` по имени стиля из UI.

    Неизвестный стиль не является ошибкой: используется сплошная заливка цветом рамки.
    """
    match style:
        case FillStyle.SOLID.value:
            return SolidFill(border_color)
        case FillStyle.LINEAR.value:
            return LinearGradientFill(color_a, color_b)
        case FillStyle.RADIAL.value:
            return RadialGradientFill(color_a, color_b)
        case FillStyle.DIAGONAL.value:
            return DiagonalGradientFill(color_a, color_b)
        case _:
            return SolidFill(border_color)
