from __future__ import annotations

import pytest

from aspectframe.errors import InvalidInput
from aspectframe.models.fill_model import (
    DiagonalGradientFill,
    FillStyle,
    LinearGradientFill,
    RadialGradientFill,
    SolidFill,
    fill_from_style,
)
from aspectframe.services.fill_service import FillRenderer
from aspectframe.services.render_service import RenderSurface

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def _paint(fill, size=(100, 60), renderer=None, fallback=None):
    surface = RenderSurface(*size)
    (renderer or FillRenderer()).paint(surface, size[0], size[1], fill, fallback=fallback)
    return surface.image


def _close(actual, expected, tol=3):
    return all(abs(a - e) <= tol for a, e in zip(actual, expected))


def test_solid_fill_is_uniform():
    img = _paint(SolidFill("#336699"))
    assert img.getcolors() == [(100 * 60, (0x33, 0x66, 0x99, 255))]


def test_linear_gradient_runs_left_to_right():
    img = _paint(LinearGradientFill("#000000", "#FFFFFF"))
    assert _close(img.getpixel((0, 0)), BLACK)
    assert _close(img.getpixel((99, 59)), WHITE)
    row = [img.getpixel((x, 30))[0] for x in range(100)]
    assert row == sorted(row)
    # horizontal only: every row is the same
    assert img.getpixel((40, 0)) == img.getpixel((40, 59))


def test_radial_gradient_is_concentric_from_center():
    img = _paint(RadialGradientFill("#FF0000", "#0000FF"), size=(100, 100))
    center = img.getpixel((50, 50))
    assert _close(center, (255, 0, 0, 255))
    corners = {img.getpixel(xy) for xy in [(0, 0), (99, 0), (0, 99), (99, 99)]}
    assert len(corners) == 1
    corner = corners.pop()
    # corner pixel center is 49.5*sqrt(2) from the middle, radius is 100
    assert _close(corner, (76, 0, 179, 255), tol=2)


def test_diagonal_gradient_runs_corner_to_corner():
    img = _paint(DiagonalGradientFill("#000000", "#FFFFFF"), size=(80, 80))
    assert _close(img.getpixel((0, 0)), BLACK)
    assert _close(img.getpixel((79, 79)), WHITE)
    assert img.getpixel((0, 79)) == img.getpixel((79, 0))


def test_radial_gradient_on_wide_canvas_uses_longer_side():
    img = _paint(RadialGradientFill("#000000", "#FFFFFF"), size=(200, 100))
    # right edge is ~99.5 px from the center, radius is 200
    assert _close(img.getpixel((199, 50)), (127, 127, 127, 255), tol=1)
    assert _close(img.getpixel((100, 50)), BLACK, tol=1)


def test_diagonal_gradient_on_wide_canvas_projects_onto_diagonal():
    img = _paint(DiagonalGradientFill("#000000", "#FFFFFF"), size=(200, 100))
    assert _close(img.getpixel((199, 0)), (204, 204, 204, 255), tol=1)
    assert _close(img.getpixel((0, 99)), (51, 51, 51, 255), tol=1)
    assert _close(img.getpixel((199, 99)), WHITE)


@pytest.mark.parametrize("fill", [None, "purple", object(), {"kind": "conic"}])
def test_unknown_fill_falls_back_to_solid(fill):
    img = _paint(fill, renderer=FillRenderer("#123456"))
    assert img.getcolors() == [(100 * 60, (0x12, 0x34, 0x56, 255))]


def test_default_fallback_is_configured_border_color():
    img = _paint("nope")
    assert img.getpixel((5, 5)) == WHITE


def test_per_call_fallback_overrides_configured_color():
    img = _paint({"kind": "conic"}, renderer=FillRenderer("#123456"), fallback="#abc")
    assert img.getcolors() == [(100 * 60, (0xAA, 0xBB, 0xCC, 255))]


@pytest.mark.parametrize(
    "style, expected",
    [
        ("solid", SolidFill("#AA0000")),
        (FillStyle.LINEAR, LinearGradientFill("#111111", "#222222")),
        ("gradient-radial", RadialGradientFill("#111111", "#222222")),
        ("gradient-diagonal", DiagonalGradientFill("#111111", "#222222")),
        ("gradient-conic", SolidFill("#AA0000")),
        ("", SolidFill("#AA0000")),
    ],
)
def test_fill_from_style(style, expected):
    assert fill_from_style(style, "#aa0000", "#111111", "#222222") == expected


def test_short_hex_is_normalized():
    assert SolidFill("#fa0").color == "#FFAA00"


@pytest.mark.parametrize("color", ["red", "#12345", "#GGGGGG", "", None])
def test_invalid_color_is_rejected(color):
    with pytest.raises(InvalidInput):
        SolidFill(color)


def test_style_labels():
    assert FillStyle.DIAGONAL.label == "Gradient Diagonal"
