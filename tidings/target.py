"""
Tidings — Event target
Low-level dispatch primitive with DOM EventTarget semantics.

Dispatch rules:
  - Listeners run synchronously, in registration order
  - A (callback, capture) pair is registered at most once per event name
  - The listener list is snapshotted when dispatch starts: listeners removed
    mid-dispatch are skipped, listeners added mid-dispatch wait for the next one
  - Listener failures follow the target's listener_errors policy
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from . import config
from .models import Event, ListenerOptions, OptionsLike

logger = logging.getLogger("tidings.target")

EventCallback = Callable[[Event], Any]


def same_listener(a: Callable[..., Any], b: Callable[..., Any]) -> bool:
    """
    True if `a` and `b` are the same listener.

    Listeners match by object identity. Bound methods are recreated on every
    attribute access, so they match when they wrap the same function on the
    same instance.
    """
    if a is b:
        return True
    if hasattr(a, "__self__") and hasattr(b, "__self__"):
        return a.__self__ is b.__self__ and a == b
    return False


@dataclass(eq=False)
class _Registration:
    callback: EventCallback
    capture: bool
    once: bool
    removed: bool = False

    def matches(self, callback: EventCallback, capture: bool) -> bool:
        return self.capture == capture and same_listener(self.callback, callback)


class EventTarget:
    """Holds callbacks per event name and dispatches Event records to them."""

    def __init__(self, listener_errors: str | None = None) -> None:
        policy = listener_errors if listener_errors is not None else config.LISTENER_ERRORS
        if policy not in config.LISTENER_ERROR_POLICIES:
            raise ValueError(
                f"listener_errors must be one of {config.LISTENER_ERROR_POLICIES}, got {policy!r}"
            )
        self._listener_errors = policy
        self._registrations: dict[str, list[_Registration]] = {}

    @property
    def listener_errors(self) -> str:
        return self._listener_errors

    def _find(self, name: str, callback: EventCallback, capture: bool) -> _Registration | None:
        for reg in self._registrations.get(name, ()):
            if reg.matches(callback, capture):
                return reg
        return None

    def add_event_listener(self, name: str, callback: EventCallback, options: OptionsLike = None) -> None:
        opts = ListenerOptions.coerce(options)
        if self._find(name, callback, opts.capture) is not None:
            return
        self._registrations.setdefault(name, []).append(
            _Registration(callback=callback, capture=opts.capture, once=opts.once)
        )

    def remove_event_listener(self, name: str, callback: EventCallback, options: OptionsLike = None) -> None:
        opts = ListenerOptions.coerce(options)
        reg = self._find(name, callback, opts.capture)
        if reg is None:
            return
        reg.removed = True
        regs = self._registrations[name]
        regs.remove(reg)
        if not regs:
            del self._registrations[name]

    def dispatch_event(self, event: Event) -> bool:
        """
        Invoke every listener registered for event.name.

        Returns:
            False if the event is cancelable and a listener called
            prevent_default(), True otherwise.
        """
        event._reset()
        snapshot = list(self._registrations.get(event.name, ()))
        for reg in snapshot:
            if reg.removed:
                continue
            if reg.once:
                self.remove_event_listener(event.name, reg.callback, reg.capture)
            self._invoke(reg.callback, event)
        return not event.default_prevented

    def _invoke(self, callback: EventCallback, event: Event) -> None:
        if self._listener_errors == "raise":
            callback(event)
            return
        try:
            callback(event)
        except Exception:
            logger.exception("Listener %r failed for event %s", callback, event.name)
