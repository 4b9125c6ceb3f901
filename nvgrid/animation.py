"""Easing functions and a critically damped spring used for smooth motion."""

from __future__ import annotations

import math
from typing import Callable, Sequence

EaseFunc = Callable[[float], float]
Point = tuple[float, float]

_F32_EPSILON = 1.1920929e-07


def ease_linear(t: float) -> float:
    """Identity easing: progress equals time."""
    return float(t)


def ease_in_quad(t: float) -> float:
    return t * t


def ease_out_quad(t: float) -> float:
    return -t * (t - 2.0)


def ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2.0 * t * t
    n = t * 2.0 - 1.0
    return -0.5 * (n * (n - 2.0) - 1.0)


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    n = t - 1.0
    return n * n * n + 1.0


def ease_in_out_cubic(t: float) -> float:
    n = 2.0 * t
    if n < 1.0:
        return 0.5 * n * n * n
    n -= 2.0
    return 0.5 * (n * n * n + 2.0)


def ease_in_expo(t: float) -> float:
    if t == 0.0:
        return 0.0
    return 2.0 ** (10.0 * (t - 1.0))


def ease_out_expo(t: float) -> float:
    if abs(t - 1.0) < _F32_EPSILON:
        return 1.0
    return 1.0 - 2.0 ** (-10.0 * t)


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation between ``start`` and ``end``."""
    return start + (end - start) * t


def ease(ease_func: EaseFunc, start: float, end: float, t: float) -> float:
    """Interpolate between ``start`` and ``end`` along an easing curve."""
    return lerp(start, end, ease_func(t))


def ease_point(ease_func: EaseFunc, start: Sequence[float], end: Sequence[float], t: float) -> Point:
    """Ease both coordinates of a 2D point."""
    return (
        ease(ease_func, start[0], end[0], t),
        ease(ease_func, start[1], end[1], t),
    )


class CriticallyDampedSpringAnimation:
    """A spring that pulls ``position`` towards zero without overshooting."""

    def __init__(self) -> None:
        self.position = 0.0
        self._velocity = 0.0

    def update(self, dt: float, animation_length: float) -> bool:
        """Advance by ``dt`` seconds; return True while still animating."""
        if animation_length <= dt:
            self.reset()
            return False
        if self.position == 0.0:
            return False

        zeta = 1.0
        # Reach the destination within a 2% tolerance in animation_length time.
        omega = 4.0 / (zeta * animation_length)

        a = self.position
        b = self.position * omega + self._velocity
        c = math.exp(-omega * dt)

        self.position = (a + b * dt) * c
        self._velocity = c * (-a * omega - b * dt * omega + b)

        if abs(self.position) < 0.01:
            self.reset()
            return False
        return True

    def reset(self) -> None:
        """Stop the animation at rest."""
        self.position = 0.0
        self._velocity = 0.0