"""
Sample a timeline over many query times.

Useful for previewing curves or checking an animation offline without a
render loop. Sampling only queries the timeline; it never changes it.
"""

from typing import Dict, Iterable

import numpy as np

from .models import is_numeric
from .timeline_engine import Timeline


def sample_property(timeline: Timeline, key: str, times: Iterable[float]) -> np.ndarray:
    """Resolved value of key at each time, as a float array."""
    times = np.asarray(list(times), dtype=np.float64)
    values = np.empty_like(times)
    for i, t in enumerate(times):
        value = timeline.get_current_props(float(t)).get(key)
        values[i] = value if is_numeric(value) else np.nan
    return values


def sample_props(timeline: Timeline, times: Iterable[float]) -> Dict[str, np.ndarray]:
    """Arrays of every numeric property over times."""
    times = np.asarray(list(times), dtype=np.float64)
    frames = [timeline.get_current_props(float(t)) for t in times]

    keys = []
    for frame in frames:
        for key, value in frame.items():
            if is_numeric(value) and key not in keys:
                keys.append(key)

    return {
        key: np.array([frame.get(key, np.nan) for frame in frames], dtype=np.float64)
        for key in keys
    }
