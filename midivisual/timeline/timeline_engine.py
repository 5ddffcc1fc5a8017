"""
Timeline Engine for MIDI-reactive shapes.

Resolves, for any query time, the value of every animated property of one
object given the segments declared on it.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..config import TimelineConfig
from .easing import get_easing
from .models import Segment, TimelineEntry, is_numeric, normalize_options
from .timecode import event_time_to_ms

logger = logging.getLogger('midivisual.timeline')


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


class Timeline:
    """
    Declarative animation timeline for a single object.

    Segments are declared with animate_to() and start either at an explicit
    time (at=...), after the previous segment (no at), or never (at=None,
    e.g. a release that has not happened yet). get_current_props() is a pure
    query and may be called any number of times with any time.

    When two segments touch the same property, the one that started most
    recently owns it and animates from wherever the property was at the
    instant it took over.

    A snapshot (capture_current_props) records the last rendered values so a
    timeline whose segments are cleared and re-declared every frame stays
    visually continuous.
    """

    def __init__(
        self,
        props: Mapping[str, Any],
        first_invoked_time: float = 0,
        config: Optional[TimelineConfig] = None,
    ):
        self._config = config or TimelineConfig()
        self._initial_props: Dict[str, Any] = dict(props)
        self._first_invoked_time = first_invoked_time

        self._segments: List[Segment] = []
        self._applied_options: Dict[str, Any] = {}
        self._snapshot: Optional[Dict[str, Any]] = None

        # Warning latches, one per kind for the lifetime of the instance
        self._warned_mixed_delay = False
        self._warned_missing_duration = False

    # === Introspection ===

    @property
    def first_invoked_time(self) -> float:
        return self._first_invoked_time

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def snapshot(self) -> Optional[Dict[str, Any]]:
        return dict(self._snapshot) if self._snapshot is not None else None

    def __repr__(self) -> str:
        return (
            f"Timeline(segments={len(self._segments)}, "
            f"first_invoked_time={self._first_invoked_time}, "
            f"snapshot={'yes' if self._snapshot is not None else 'no'})"
        )

    # === Declaration ===

    def animate_to(self, target_props: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None, **kwargs) -> "Timeline":
        """
        Append a segment animating target_props.

        Options (mapping and/or keywords, keywords win) are merged over any
        sticky options set with with_options():
            at       -- start time; None means the segment never activates
            duration -- ms or time expression (default 500)
            end_time -- alternative to duration
            delay    -- added to the start time
            easing   -- callable or registered easing name
            reverse  -- run the eased progress backwards
        """
        merged = {
            **self._applied_options,
            **normalize_options(options),
            **normalize_options(kwargs),
        }
        targets = {key: value for key, value in target_props.items() if is_numeric(value)}
        if len(targets) != len(target_props):
            skipped = sorted(set(target_props) - set(targets))
            logger.debug(f"Ignoring non-numeric target props: {skipped}")

        self._segments.append(Segment(targets, merged))
        return self

    def with_options(self, options: Optional[Mapping[str, Any]] = None, **kwargs) -> "Timeline":
        """Set default options for subsequent animate_to() calls. Stacks."""
        self._applied_options = {
            **self._applied_options,
            **normalize_options(options),
            **normalize_options(kwargs),
        }
        return self

    def update_initial_props(self, props: Mapping[str, Any]) -> None:
        self._initial_props = dict(props)

    def clear_segments(self) -> None:
        self._segments = []

    def reset(self) -> None:
        """Drop all declared segments."""
        self.clear_segments()

    # === Snapshot ===

    def capture_current_props(self, time_in_ms: float) -> None:
        """Record the props resolved at time_in_ms as ground truth."""
        self._snapshot = self.get_current_props(time_in_ms)

    def clear_snapshot(self) -> None:
        self._snapshot = None

    # === Resolution ===

    def get_current_props(self, time_in_ms: float) -> Dict[str, Any]:
        """Resolve every property at time_in_ms. Never mutates state."""
        relative_time = time_in_ms - self._first_invoked_time

        # sorted() is stable, so equal start times keep declaration order
        active = sorted(
            (entry for entry in self._build_entries() if entry.is_active),
            key=lambda entry: entry.start_time,
        )
        base = self._merged_base()

        keys = [key for key, value in base.items() if is_numeric(value)]
        for entry in active:
            for key in entry.segment.target_props:
                if key not in keys:
                    keys.append(key)

        result = dict(self._initial_props)
        for key in keys:
            touching = [entry for entry in active if entry.touches(key)]
            result[key] = self._resolve(key, relative_time, touching, touching, base)
        return result

    def _build_entries(self) -> List[TimelineEntry]:
        """Resolve start time and duration of every segment, in declaration order."""
        entries: List[TimelineEntry] = []
        previous: Optional[TimelineEntry] = None

        for segment in self._segments:
            options = segment.options
            delay = event_time_to_ms(options.get("delay"))

            if segment.has_explicit_at:
                at = options["at"]
                if at is None:
                    start_time = None
                    duration = self._segment_duration(options, anchor=0)
                else:
                    at_ms = event_time_to_ms(at)
                    start_time = at_ms + delay
                    duration = self._segment_duration(options, anchor=at_ms)
            else:
                if previous is None:
                    start_time = delay
                elif previous.start_time is None:
                    # Not triggered yet, so nothing chained after it is either
                    start_time = None
                else:
                    start_time = previous.end_time + delay
                anchor = start_time if start_time is not None else 0
                duration = self._segment_duration(options, anchor=anchor)

            entry = TimelineEntry(segment, start_time, duration)
            entries.append(entry)
            previous = entry

        return entries

    def _segment_duration(self, options: Dict[str, Any], anchor: float) -> float:
        if options.get("duration") is not None:
            return event_time_to_ms(options["duration"])
        if options.get("end_time") is not None:
            return event_time_to_ms(options["end_time"]) - anchor
        return self._config.default_duration

    def _merged_base(self) -> Dict[str, Any]:
        base = dict(self._initial_props)
        if self._snapshot is not None:
            for key, value in self._snapshot.items():
                if is_numeric(value):
                    base[key] = value
        return base

    def _base_value(self, key: str, base: Dict[str, Any]) -> float:
        value = base.get(key)
        if is_numeric(value):
            return value
        return self._config.default_for(key)

    def _resolve(
        self,
        key: str,
        time: float,
        candidates: List[TimelineEntry],
        touching: List[TimelineEntry],
        base: Dict[str, Any],
    ) -> float:
        """
        Value of key at time, considering only candidates.

        candidates and touching are sorted by start time; touching is the full
        set of active entries for key and is used for the snapshot check.
        """
        started = [entry for entry in candidates if time >= entry.start_time]
        if not started:
            return self._base_value(key, base)

        # Most recently started segment wins
        owner = started[-1]
        target = owner.segment.target_props[key]
        options = owner.segment.options
        reverse = bool(options.get("reverse"))

        if time >= owner.end_time:
            if not reverse:
                return target
            # A reversed curve ends where it began
            return self._start_value(key, owner, candidates, touching, base)

        elapsed = time - owner.start_time
        raw = 1.0 if owner.duration == 0 else _clamp01(elapsed / owner.duration)
        progress = get_easing(options.get("easing"))(raw)
        if reverse:
            progress = 1 - progress

        start_value = self._start_value(key, owner, candidates, touching, base)
        return start_value + (target - start_value) * progress

    def _start_value(
        self,
        key: str,
        owner: TimelineEntry,
        candidates: List[TimelineEntry],
        touching: List[TimelineEntry],
        base: Dict[str, Any],
    ) -> float:
        """Value of key the instant before owner took over."""
        if self._snapshot is not None and is_numeric(self._snapshot.get(key)):
            is_final = not any(
                entry.start_time > owner.start_time
                for entry in touching
                if entry is not owner
            )
            if is_final:
                return self._snapshot[key]

        remaining = [entry for entry in candidates if entry is not owner]
        return self._resolve(key, owner.start_time, remaining, touching, base)

    # === Validation ===

    def validate(self) -> None:
        """
        Emit advisory warnings for ambiguous declarations.

        Each kind of warning is logged at most once per instance, however
        many times segments are rebuilt or validate() is called.
        """
        if not self._config.warnings_enabled:
            return

        if not self._warned_mixed_delay and "delay" not in self._applied_options:
            timed = [
                segment for segment in self._segments
                if segment.has_explicit_at and segment.options["at"] is not None
            ]
            delayed = [segment for segment in timed if segment.options.get("delay") is not None]
            if delayed and len(delayed) < len(timed):
                self._warned_mixed_delay = True
                logger.warning(
                    f"{len(delayed)} of {len(timed)} segments with 'at' also set 'delay'; "
                    f"timing may be ambiguous. Use with_options(delay=...) to apply it to all.",
                    extra={"warning_kind": "mixed_delay"},
                )

        if not self._warned_missing_duration and "duration" not in self._applied_options:
            missing = [
                segment for segment in self._segments
                if segment.options.get("duration") is None and segment.options.get("end_time") is None
            ]
            if missing:
                self._warned_missing_duration = True
                logger.warning(
                    f"{len(missing)} segment(s) have no duration or end_time; "
                    f"using default of {self._config.default_duration}ms",
                    extra={"warning_kind": "missing_duration"},
                )
