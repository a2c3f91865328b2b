from __future__ import annotations

from fractions import Fraction

import pytest
from PIL import Image
from io import BytesIO

from aspectframe.errors import InvalidInput
from aspectframe.models.fill_model import LinearGradientFill, SolidFill
from aspectframe.models.image_model import TargetRatio
from aspectframe.models.plan_model import round_px
from aspectframe.models.session_model import SessionState
from aspectframe.services.composition_service import CompositionService, compute_plan

WHITE = SolidFill("#FFFFFF")

SIZES = [(1, 1), (1000, 500), (800, 1000), (333, 777), (1920, 1080), (1, 4000), (4000, 1), (1080, 1350)]


@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("ratio", list(TargetRatio))
@pytest.mark.parametrize("border", [0, 1, 37, 200])
def test_inner_frame_matches_target_ratio(size, ratio, border):
    plan = compute_plan(size[0], size[1], ratio, border, WHITE)
    inner = (plan.canvas_width - 2 * border) / (plan.canvas_height - 2 * border)
    assert inner == pytest.approx(float(ratio.value), rel=1e-6)


@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("ratio", list(TargetRatio))
def test_source_is_centered_and_unscaled(size, ratio):
    w, h = size
    plan = compute_plan(w, h, ratio, 13, WHITE)
    assert plan.draw_x == (plan.canvas_width - w) / 2
    assert plan.draw_y == (plan.canvas_height - h) / 2
    assert (plan.draw_width, plan.draw_height) == (w, h)


def test_scenario_wider_source_uses_native_height():
    plan = compute_plan(1000, 500, TargetRatio.SQUARE, 0, WHITE)
    assert (plan.canvas_width, plan.canvas_height) == pytest.approx((500, 500))
    assert plan.draw_x == pytest.approx(-250)
    assert plan.draw_y == pytest.approx(0)


def test_scenario_taller_source_uses_native_width():
    plan = compute_plan(800, 1000, TargetRatio.LANDSCAPE, 50, WHITE)
    assert plan.inner_width == 800
    assert plan.inner_height == pytest.approx(450)
    assert plan.pixel_size == (900, 550)
    assert plan.draw_x == 50
    assert plan.draw_y == pytest.approx(-225)


def test_scenario_square_source_square_target():
    plan = compute_plan(500, 500, TargetRatio.SQUARE, 25, WHITE)
    assert (plan.canvas_width, plan.canvas_height) == (550, 550)
    assert (plan.draw_x, plan.draw_y) == (25, 25)


def test_zero_border_gives_bare_inner_frame():
    plan = compute_plan(600, 400, TargetRatio.PORTRAIT, 0, WHITE)
    assert plan.canvas_width == plan.inner_width
    assert plan.canvas_height == plan.inner_height


def test_compute_plan_is_idempotent():
    fill = LinearGradientFill("#112233", "#445566")
    first = compute_plan(1234, 567, TargetRatio.PORTRAIT, 42, fill)
    second = compute_plan(1234, 567, TargetRatio.PORTRAIT, 42, fill)
    assert first == second
    assert first.fill is fill


def test_numeric_ratios_are_accepted():
    assert compute_plan(100, 100, 2, 0, WHITE).pixel_size == (100, 50)
    assert compute_plan(100, 100, Fraction(1, 2), 0, WHITE).pixel_size == (50, 100)
    assert compute_plan(100, 100, 0.5, 0, WHITE).pixel_size == (50, 100)


@pytest.mark.parametrize(
    "args",
    [
        (0, 10, TargetRatio.SQUARE, 0),
        (10, -1, TargetRatio.SQUARE, 0),
        (10.5, 10, TargetRatio.SQUARE, 0),
        (True, 10, TargetRatio.SQUARE, 0),
        (10, 10, TargetRatio.SQUARE, -1),
        (10, 10, 0, 0),
        (10, 10, -1.5, 0),
        (10, 10, float("inf"), 0),
        (10, 10, "square", 0),
    ],
)
def test_invalid_input_is_rejected(args):
    with pytest.raises(InvalidInput):
        compute_plan(*args, WHITE)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        compute_plan(10, 10, TargetRatio.SQUARE, -3, WHITE)


def test_rounding_is_half_up():
    assert round_px(2.5) == 3
    assert round_px(-0.5) == 0
    assert round_px(-0.7) == -1
    plan = compute_plan(3, 2, TargetRatio.PORTRAIT, 0, WHITE)
    # inner frame 1.6 x 2
    assert plan.pixel_size == (2, 2)
    assert plan.pixel_offset == (-1, 0)


# ---------- Полный цикл через сессию ----------

def _decode(processed):
    return Image.open(BytesIO(processed.data)).convert("RGBA")


def test_process_without_image_is_invalid_input():
    session = SessionState()
    with pytest.raises(InvalidInput):
        CompositionService().process(session, TargetRatio.SQUARE)
    assert session.processed is None


def test_process_paints_border_and_centers_source(make_source):
    session = SessionState()
    session.replace_image(make_source(500, 500, color=(200, 30, 30, 255)))
    session.set_border_color("#00FF00")
    session.set_border_width(25)

    processed = CompositionService().process(session, TargetRatio.SQUARE)

    assert session.processed is processed
    assert processed.filename == "instagram_bordered_image.png"
    img = _decode(processed)
    assert img.size == (550, 550)
    assert img.getpixel((0, 0)) == (0, 255, 0, 255)
    assert img.getpixel((24, 24)) == (0, 255, 0, 255)
    assert img.getpixel((25, 25)) == (200, 30, 30, 255)
    assert img.getpixel((524, 524)) == (200, 30, 30, 255)
    assert img.getpixel((525, 525)) == (0, 255, 0, 255)


def test_process_lets_wide_source_overflow_into_border(make_source):
    session = SessionState()
    session.replace_image(make_source(1000, 500, color=(10, 20, 30, 255)))
    session.set_border_width(0)

    img = _decode(CompositionService().process(session, TargetRatio.SQUARE))

    assert img.size == (500, 500)
    for xy in [(0, 0), (499, 0), (0, 499), (499, 499), (250, 250)]:
        assert img.getpixel(xy) == (10, 20, 30, 255)


def test_process_pads_tall_source_for_landscape(make_source):
    session = SessionState()
    session.replace_image(make_source(800, 1000, color=(10, 20, 30, 255)))
    session.set_border_width(50)
    session.fill_style = "gradient-linear"
    session.set_gradient_colors("#000000", "#FFFFFF")

    img = _decode(CompositionService().process(session, TargetRatio.LANDSCAPE))

    assert img.size == (900, 550)
    # left and right strips are border fill, the middle column is the source
    assert img.getpixel((10, 275))[:3] != (10, 20, 30)
    assert img.getpixel((450, 275)) == (10, 20, 30, 255)
    assert img.getpixel((0, 0))[0] < img.getpixel((899, 0))[0]


def test_failed_process_keeps_previous_result(make_source):
    session = SessionState()
    session.replace_image(make_source(100, 80))
    service = CompositionService()
    first = service.process(session, TargetRatio.PORTRAIT)

    session.border_width = -1
    with pytest.raises(InvalidInput):
        service.process(session, TargetRatio.PORTRAIT)
    assert session.processed is first


def test_render_unknown_fill_uses_given_fallback_color(make_source):
    plan = compute_plan(10, 10, TargetRatio.SQUARE, 5, "conic")

    img = _decode(CompositionService().render(make_source(10, 10), plan, fallback_color="#0000FF"))

    assert img.size == (20, 20)
    assert img.getpixel((0, 0)) == (0, 0, 255, 255)


def test_process_falls_back_to_session_border_color(make_source, monkeypatch):
    session = SessionState()
    session.replace_image(make_source(10, 10))
    session.set_border_color("#FF8800")
    session.set_border_width(5)
    monkeypatch.setattr(session, "fill_spec", lambda: "conic")

    img = _decode(CompositionService().process(session, TargetRatio.SQUARE))

    assert img.getpixel((0, 0)) == (0xFF, 0x88, 0x00, 255)
    assert img.getpixel((10, 10)) == (200, 30, 30, 255)
