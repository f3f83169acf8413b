import pytest

from campus_monitor.utils.math_utils import (
    MAP_CENTER_PERCENT,
    clamp_percent,
    point_to_percent,
    to_percent,
    to_pixels,
)


def test_to_percent_inside_container():
    assert to_percent(click=150, origin=100, size=200) == pytest.approx(25.0)


def test_to_percent_clamps_outside_clicks():
    assert to_percent(click=50, origin=100, size=200) == 0.0
    assert to_percent(click=400, origin=100, size=200) == 100.0


def test_to_percent_zero_size_rejected():
    with pytest.raises(ValueError):
        to_percent(click=10, origin=0, size=0)


@pytest.mark.parametrize("width", [320, 800, 1920])
def test_percent_survives_resize(width):
    # Позиция в процентах не зависит от размера, в котором её отрисовали
    x = to_percent(click=0.3 * 800, origin=0, size=800)
    assert to_pixels(x, width) == pytest.approx(0.3 * width)


def test_point_to_percent_pair():
    assert point_to_percent((60, 35), (10, 10), (100, 50)) == pytest.approx((50.0, 50.0))


def test_clamp_percent_bounds():
    assert clamp_percent(-5) == 0.0
    assert clamp_percent(105) == 100.0
    assert clamp_percent(MAP_CENTER_PERCENT) == 50.0
