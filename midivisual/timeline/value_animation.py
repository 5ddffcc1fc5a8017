"""
Single-value animation helper.

A lighter alternative to Timeline for render code that only needs one
number, e.g. a glow radius that swells after a note is attacked:

    radius = get_animated_value(elapsed, {"from": 10, "to": 40, "duration": 300})

Passing a list animates through several steps; each step inherits any
option it does not set from the step before it.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .easing import EasingFunction, get_easing
from .timecode import EventTime, event_time_to_ms


@dataclass
class AnimationOptions:
    """One step of a value animation."""
    from_value: Optional[float] = None
    to: Optional[float] = None
    start_time: Optional[EventTime] = None  # None = not scheduled
    duration: Optional[EventTime] = None
    end_time: Optional[EventTime] = None
    delay: Optional[EventTime] = None
    easing: Optional[Union[str, EasingFunction]] = None
    reverse: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnimationOptions":
        data = dict(data)
        if "from" in data:
            data["from_value"] = data.pop("from")
        if "startTime" in data:
            data["start_time"] = data.pop("startTime")
        if "endTime" in data:
            data["end_time"] = data.pop("endTime")
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class _Timing:
    start_ms: float
    duration_ms: float

    @property
    def end_ms(self) -> float:
        return self.start_ms + self.duration_ms


AnimationInput = Union[AnimationOptions, Mapping[str, Any]]


def _coerce(options: AnimationInput) -> AnimationOptions:
    if isinstance(options, AnimationOptions):
        return options
    coerced = AnimationOptions.from_dict(options)
    # A single mapping without a start time starts at 0
    if "start_time" not in _present_keys(options):
        coerced.start_time = 0
    return coerced


def _timing(options: AnimationOptions) -> _Timing:
    start_ms = event_time_to_ms(options.start_time)
    delay_ms = event_time_to_ms(options.delay) if options.delay else 0

    # Zero duration is treated as unset: 1 ms keeps the division defined
    duration_ms = 1
    if options.end_time:
        duration_ms = event_time_to_ms(options.end_time) - start_ms
    elif options.duration:
        duration_ms = event_time_to_ms(options.duration)

    return _Timing(start_ms + delay_ms, duration_ms)


def _progress(options: AnimationOptions, raw: float) -> float:
    progress = get_easing(options.easing)(raw)
    if options.reverse:
        progress = 1 - progress
    return progress


def _interpolate(from_value: float, to: float, progress: float) -> float:
    return from_value + (to - from_value) * progress


def get_animated_value(current_time: float, options: Union[AnimationInput, Sequence[AnimationInput]]) -> float:
    """Value at current_time of a single animation or a list of steps."""
    if isinstance(options, (list, tuple)):
        return _timeline_value(current_time, options)
    return _single_value(current_time, _coerce(options))


def _single_value(current_time: float, options: AnimationOptions) -> float:
    from_value = options.from_value or 0
    to = options.to or 0

    if options.start_time is None:
        return from_value

    timing = _timing(options)
    elapsed = current_time - timing.start_ms
    raw = min(1.0, max(0.0, elapsed / timing.duration_ms)) if elapsed > 0 else 0.0
    return _interpolate(from_value, to, _progress(options, raw))


def _step_dict(step: AnimationInput) -> Dict[str, Any]:
    """Only the options a step actually sets."""
    if isinstance(step, AnimationOptions):
        # Fields left at their defaults count as unset
        return {
            f.name: getattr(step, f.name) for f in fields(AnimationOptions)
            if getattr(step, f.name) != f.default
        }
    return {
        k: v for k, v in vars(AnimationOptions.from_dict(step)).items()
        if k in _present_keys(step)
    }


def _present_keys(data: Mapping[str, Any]) -> set:
    aliases = {"from": "from_value", "startTime": "start_time", "endTime": "end_time"}
    return {aliases.get(key, key) for key in data}


def _merge_steps(steps: Sequence[AnimationInput]) -> List[AnimationOptions]:
    """Each step inherits every option it does not set from the steps before it."""
    merged: List[AnimationOptions] = []
    accumulated: Dict[str, Any] = {}
    for step in steps:
        accumulated.update(_step_dict(step))
        # A step that never received a start time is not scheduled
        merged.append(AnimationOptions(**accumulated))
    return merged


def _step_value_at(step: AnimationOptions, time: float) -> float:
    from_value = step.from_value or 0
    to = step.to or 0
    timing = _timing(step)
    elapsed = time - timing.start_ms

    if elapsed <= 0:
        return from_value
    if elapsed >= timing.duration_ms:
        return from_value if step.reverse else to

    raw = min(1.0, max(0.0, elapsed / timing.duration_ms))
    return _interpolate(from_value, to, _progress(step, raw))


def _timeline_value(current_time: float, steps: Sequence[AnimationInput]) -> float:
    merged = _merge_steps(steps)
    scheduled = sorted(
        (step for step in merged if step.start_time is not None),
        key=lambda step: event_time_to_ms(step.start_time),
    )

    if not scheduled:
        if merged and merged[0].from_value is not None:
            return merged[0].from_value
        return 0

    # Latest step that has started wins
    for i in range(len(scheduled) - 1, -1, -1):
        step = scheduled[i]
        timing = _timing(step)
        if current_time < timing.start_ms:
            continue

        effective_from = step.from_value or 0
        for j in range(i - 1, -1, -1):
            previous = scheduled[j]
            previous_timing = _timing(previous)
            # Started while the previous step was still running: take over
            # from wherever it had got to
            if previous_timing.start_ms <= timing.start_ms < previous_timing.end_ms:
                effective_from = _step_value_at(previous, timing.start_ms)
                break

        elapsed = current_time - timing.start_ms
        to = step.to or 0
        if elapsed <= timing.duration_ms:
            raw = min(1.0, max(0.0, elapsed / timing.duration_ms))
            return _interpolate(effective_from, to, _progress(step, raw))
        return (step.from_value or 0) if step.reverse else to

    return scheduled[0].from_value or 0
