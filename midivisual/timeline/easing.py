"""
Easing functions for timeline segments.

Each function maps linear progress in [0, 1] to eased progress, with
f(0) == 0 and f(1) == 1.
"""

import logging
import math
from typing import Callable, Dict, Optional, Union

logger = logging.getLogger('easing')

EasingFunction = Callable[[float], float]


def _ease_linear(t: float) -> float:
    return t


def _ease_in_quad(t: float) -> float:
    return t * t


def _ease_out_quad(t: float) -> float:
    return t * (2 - t)


def _ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


def _ease_in_cubic(t: float) -> float:
    return t * t * t


def _ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def _ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


EASING_FUNCTIONS: Dict[str, EasingFunction] = {
    "linear": _ease_linear,
    "ease_in": _ease_in_quad,
    "ease_out": _ease_out_quad,
    "ease_in_out": _ease_in_out_quad,
    "ease_in_cubic": _ease_in_cubic,
    "ease_out_cubic": _ease_out_cubic,
    "sine": _ease_in_out_sine,
}


def list_easings():
    """List registered easing names."""
    return list(EASING_FUNCTIONS.keys())


def get_easing(easing: Optional[Union[str, EasingFunction]]) -> EasingFunction:
    """
    Resolve an easing option to a function.

    Callables are returned unchanged, None means linear, and names are looked
    up in EASING_FUNCTIONS. Unknown names fall back to linear.
    """
    if easing is None:
        return _ease_linear
    if callable(easing):
        return easing
    fn = EASING_FUNCTIONS.get(str(easing).lower())
    if fn is None:
        logger.warning(f"Unknown easing '{easing}', falling back to linear")
        return _ease_linear
    return fn
