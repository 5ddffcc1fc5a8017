"""
Per-frame registry of timelines.

Gives "the same" shape a stable Timeline across frames without explicit IDs,
in the style of an immediate-mode UI.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Set

from ..config import TimelineConfig
from .models import PendingRender
from .timeline_engine import Timeline

logger = logging.getLogger('midivisual.registry')


class Registry:
    """
    Immediate-mode timeline registry.

    Identity is the position of a get_or_create()/queue() call within the
    frame: the first call of every frame gets identity "0", the second "1",
    and so on. Callers must therefore declare the same logical objects in the
    same order every frame. A conditional that skips a declaration in one
    frame shifts the identity of every declaration after it.

    Per frame:

        registry.begin_frame(t)
        registry.queue(props, draw).animate_to(...)   # any number of times
        registry.flush()                              # renders, in queue order
        registry.end_frame()                          # evicts undeclared shapes
    """

    def __init__(self, config: Optional[TimelineConfig] = None):
        self._config = config
        self._registry: Dict[str, Timeline] = {}
        self._call_index: int = 0
        self._seen_this_frame: Set[str] = set()
        self._pending_renders: List[PendingRender] = []
        self._current_time_in_ms: float = 0

    def begin_frame(self, time_in_ms: float) -> None:
        """Start a frame: reset call order, seen set and pending renders."""
        self._call_index = 0
        self._seen_this_frame.clear()
        self._pending_renders = []
        self._current_time_in_ms = time_in_ms

    def get_or_create(self, props: Mapping[str, Any], time_in_ms: float) -> Timeline:
        """
        Return the timeline for the next identity slot.

        An existing timeline captures a snapshot of its current value, takes
        the new props as its base and drops its segments so the caller can
        declare them afresh.
        """
        identity = str(self._call_index)
        self._call_index += 1
        self._seen_this_frame.add(identity)

        existing = self._registry.get(identity)
        if existing is not None:
            # Capture before rebuilding so re-declared segments continue
            # from what was last rendered
            existing.capture_current_props(time_in_ms)
            existing.update_initial_props(props)
            existing.clear_segments()
            return existing

        timeline = Timeline(props, time_in_ms, config=self._config)
        self._registry[identity] = timeline
        logger.debug(f"Created timeline {identity} at {time_in_ms}ms", extra={"identity": identity, "frame_time": time_in_ms})
        return timeline

    def queue(self, props: Mapping[str, Any], render_fn: Callable[[Dict[str, Any]], None]) -> Timeline:
        """
        Like get_or_create(), but defers render_fn(resolved_props) to flush().

        The returned timeline is still open for animate_to() until flush().
        """
        timeline = self.get_or_create(props, self._current_time_in_ms)
        time_in_ms = self._current_time_in_ms

        def render() -> None:
            render_fn(timeline.get_current_props(time_in_ms))

        self._pending_renders.append(PendingRender(validate=timeline.validate, render=render))
        return timeline

    def flush(self) -> None:
        """Validate and render every queued timeline, in queue order."""
        pending, self._pending_renders = self._pending_renders, []
        for item in pending:
            item.validate()
            item.render()

    def end_frame(self) -> None:
        """Evict every timeline that was not declared this frame."""
        stale = [identity for identity in self._registry if identity not in self._seen_this_frame]
        for identity in stale:
            del self._registry[identity]
        if stale:
            logger.debug(f"Evicted {len(stale)} timeline(s): {', '.join(stale)}")

    def clear(self) -> None:
        """Forget everything."""
        self._registry.clear()
        self._call_index = 0
        self._seen_this_frame.clear()
        self._pending_renders = []

    @contextmanager
    def frame(self, time_in_ms: float) -> Iterator["Registry"]:
        """Run one frame: begin, yield for declarations, then flush and end."""
        self.begin_frame(time_in_ms)
        yield self
        self.flush()
        self.end_frame()

    # === Introspection ===

    @property
    def size(self) -> int:
        return len(self._registry)

    @property
    def pending_count(self) -> int:
        return len(self._pending_renders)

    def get(self, identity: str) -> Optional[Timeline]:
        return self._registry.get(identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._registry

    def __len__(self) -> int:
        return len(self._registry)
