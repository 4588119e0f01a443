"""
Tidings — Callback adapters
Wrappers placed between user callbacks and the event target.
"""

from __future__ import annotations

from typing import Any, Callable

from .models import Event
from .target import EventCallback


def payload_passer(callback: Callable[[Any], Any]) -> EventCallback:
    """Adapt a payload-only callback so it can receive full Event records."""

    def call(event: Event) -> None:
        callback(event.payload)

    return call


def once_remover(callback: EventCallback, release: Callable[[EventCallback], None]) -> EventCallback:
    """
    Wrap callback so it runs at most once, then hands itself to `release`.

    Release happens even if the callback raises. A nested emit reaching the
    wrapper while it is still running is ignored.
    """
    fired = False

    def call(event: Event) -> None:
        nonlocal fired
        if fired:
            return
        fired = True
        try:
            callback(event)
        finally:
            release(call)

    return call
