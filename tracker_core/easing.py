"""
Easing Functions Module
Transition curves for moving the tracked layer toward its target
"""

import math
from typing import Callable, Dict


def linear(t: float) -> float:
    """Linear interpolation - no easing."""
    return t


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out (default transition)."""
    return t * (2 - t)


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease-in-out."""
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out."""
    t -= 1
    return t * t * t + 1


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


def ease_out_sine(t: float) -> float:
    """Sinusoidal ease-out."""
    return math.sin((t * math.pi) / 2)


# Only curves that stay inside [0, 1] are offered, so the layer never
# overshoots past the canvas edge.
EASING_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    'linear': linear,
    'ease_out_quad': ease_out_quad,
    'ease_in_out_quad': ease_in_out_quad,
    'ease_out_cubic': ease_out_cubic,
    'ease_in_out_cubic': ease_in_out_cubic,
    'ease_out_sine': ease_out_sine,
}

DEFAULT_EASING = 'ease_out_quad'


def get_easing(name: str) -> Callable[[float], float]:
    """
    Get an easing function by name.

    Args:
        name: Name of the easing function

    Returns:
        The easing function, or the default ease-out curve if not found
    """
    return EASING_FUNCTIONS.get(name, ease_out_quad)


def lerp(start: float, end: float, t: float) -> float:
    """
    Linear interpolation between two values.

    Args:
        start: Start value
        end: End value
        t: Progress (0-1)

    Returns:
        Interpolated value
    """
    return start + (end - start) * t


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))


def progress(elapsed: float, duration: float) -> float:
    """Fraction of a transition completed, clamped to [0, 1]."""
    if duration <= 0:
        return 1.0
    return clamp(elapsed / duration, 0.0, 1.0)
