"""Explicit ordered callback registration.

Callbacks are registered against an event name with a priority and run in
(priority, registration order) when the orchestrator fires the event.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

HookCallable = Callable[..., Any]


@dataclass(order=True)
class HookImplementation:
    """A registered callback and its ordering metadata."""

    priority: int
    sequence: int
    func: HookCallable = field(compare=False)


class HookRegistry:
    """Ordered registry of event callbacks."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookImplementation]] = defaultdict(list)
        self._sequence = 0

    def add(self, event: str, callback: HookCallable, priority: int = 10) -> None:
        """Register a callback for an event.

        Args:
            event: Event name (e.g., "init", "frontend", "editor")
            callback: Callable invoked with the keyword arguments of run()
            priority: Lower runs first; equal priorities keep registration order
        """
        impl = HookImplementation(priority=priority, sequence=self._sequence, func=callback)
        self._sequence += 1
        self._hooks[event].append(impl)
        self._hooks[event].sort()
        logger.debug(f"Registered hook {event!r} with priority {priority}")

    def callbacks(self, event: str) -> list[HookCallable]:
        """Callbacks registered for an event, in run order."""
        return [impl.func for impl in self._hooks.get(event, [])]

    def run(self, event: str, **kwargs: Any) -> list[Any]:
        """Invoke every callback of an event in order.

        Exceptions raised by a callback propagate and stop the event.

        Returns:
            Return values of the callbacks, in run order
        """
        return [callback(**kwargs) for callback in self.callbacks(event)]
