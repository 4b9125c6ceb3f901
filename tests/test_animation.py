import pytest

from nvgrid.animation import (
    CriticallyDampedSpringAnimation,
    ease,
    ease_in_cubic,
    ease_in_expo,
    ease_in_out_cubic,
    ease_in_out_quad,
    ease_in_quad,
    ease_linear,
    ease_out_cubic,
    ease_out_expo,
    ease_out_quad,
    ease_point,
    lerp,
)

START = (0.0, 0.0)
END = (1.0, 1.0)


def test_lerp():
    assert lerp(1.0, 0.0, 1.0) == 0.0


def test_ease_linear():
    assert ease(ease_linear, 1.0, 0.0, 1.0) == 0.0


def test_ease_in_quad():
    assert ease(ease_in_quad, 1.0, 0.0, 1.0) == 0.0


def test_ease_out_quad():
    assert ease(ease_out_quad, 1.0, 0.0, 1.0) == 0.0


def test_ease_in_expo():
    assert ease(ease_in_expo, 1.0, 0.0, 1.0) == 0.0
    assert ease(ease_in_expo, 1.0, 0.0, 0.0) == 1.0


def test_ease_out_expo():
    assert ease(ease_out_expo, 1.0, 0.0, 1.0) == 0.0
    assert ease(ease_out_expo, 1.0, 0.0, 1.1) == pytest.approx(0.00048828125)


def test_ease_in_out_quad():
    assert ease(ease_in_out_quad, 1.0, 0.0, 1.0) == 0.0
    assert ease(ease_in_out_quad, 1.0, 0.0, 0.4) == pytest.approx(0.67999995)


def test_ease_in_cubic():
    assert ease(ease_in_cubic, 1.0, 0.0, 1.0) == 0.0


def test_ease_out_cubic():
    assert ease(ease_out_cubic, 1.0, 0.0, 1.0) == 0.0


def test_ease_in_out_cubic():
    assert ease(ease_in_out_cubic, 1.0, 0.0, 1.0) == 0.0
    assert ease(ease_in_out_cubic, 1.0, 0.0, 0.25) == pytest.approx(0.9375)


@pytest.mark.parametrize(
    "func",
    [ease_linear, ease_in_quad, ease_out_quad, ease_in_out_quad, ease_in_cubic, ease_out_cubic,
     ease_in_out_cubic, ease_in_expo, ease_out_expo],
)
def test_ease_point_reaches_end(func):
    assert ease_point(func, START, END, 1.0) == pytest.approx(END)


def test_ease_point_in_out_quad():
    assert ease_point(ease_in_out_quad, START, END, 1.4) == pytest.approx((0.68000007, 0.68000007))


def test_ease_point_in_out_cubic():
    assert ease_point(ease_in_out_cubic, START, END, 0.25) == pytest.approx((0.0625, 0.0625))


def test_ease_point_in_expo_start():
    assert ease_point(ease_in_expo, START, END, 0.0) == START


def test_ease_point_out_expo():
    assert ease_point(ease_out_expo, START, END, 1.1) == pytest.approx((0.9995117, 0.9995117))


def test_spring_at_rest_does_not_animate():
    spring = CriticallyDampedSpringAnimation()
    assert spring.update(0.01, 0.5) is False
    assert spring.position == 0.0


def test_spring_resets_when_length_not_longer_than_dt():
    spring = CriticallyDampedSpringAnimation()
    spring.position = 10.0
    assert spring.update(0.5, 0.5) is False
    assert spring.position == 0.0


def test_spring_moves_towards_zero_and_settles():
    spring = CriticallyDampedSpringAnimation()
    spring.position = 10.0
    assert spring.update(0.01, 0.5) is True
    assert 0.0 < spring.position < 10.0
    previous = spring.position
    steps = 0
    while spring.update(0.01, 0.5):
        assert abs(spring.position) <= abs(previous)
        previous = spring.position
        steps += 1
        assert steps < 10_000
    assert spring.position == 0.0


def test_spring_reset():
    spring = CriticallyDampedSpringAnimation()
    spring.position = -3.0
    spring.update(0.01, 1.0)
    spring.reset()
    assert spring.position == 0.0
    assert spring.update(0.01, 1.0) is False