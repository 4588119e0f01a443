"""
Tidings — Listener registry
Maps the callback a caller registered (its identity) to the wrapper that is
actually attached to the event target, per event name.

The identity is what callers later pass to off() / remove_event_listener();
the wrapper is what the target compares on removal. Payload-only callbacks
and once-listeners are always wrapped, so the two differ.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .target import EventCallback, EventTarget, same_listener

logger = logging.getLogger("tidings.registry")

Listener = Callable[..., Any]


@dataclass(frozen=True, eq=False)
class ListenerEntry:
    identity: Listener
    wrapper: EventCallback
    capture: bool = False


class ListenerRegistry:
    """Ordered ListenerEntry list per event name, looked up by identity.

    Entries live in lists rather than dicts so that unhashable callables
    can register, and so that distinct listeners which compare equal are
    kept apart.
    """

    def __init__(self, target: EventTarget) -> None:
        self._target = target
        self._stores: dict[str, list[ListenerEntry]] = {}

    def get_or_create(self, name: str) -> list[ListenerEntry]:
        """Return the store for `name`, creating it if absent."""
        store = self._stores.get(name)
        if store is None:
            store = self._stores[name] = []
        return store

    def _index(self, name: str, identity: Listener) -> int | None:
        for i, entry in enumerate(self._stores.get(name, ())):
            if same_listener(entry.identity, identity):
                return i
        return None

    def register(self, name: str, identity: Listener, wrapper: EventCallback, capture: bool = False) -> ListenerEntry:
        """Map identity -> wrapper and attach the wrapper to the target.

        Re-registering an identity detaches its previous wrapper first, so
        the same identity is never delivered twice.
        """
        store = self.get_or_create(name)
        index = self._index(name, identity)
        if index is not None:
            previous = store.pop(index)
            self._target.remove_event_listener(name, previous.wrapper, previous.capture)
            logger.debug("Replacing listener %r on '%s'", identity, name)
        entry = ListenerEntry(identity=identity, wrapper=wrapper, capture=capture)
        store.append(entry)
        self._target.add_event_listener(name, wrapper, capture)
        logger.debug("Registered listener %r on '%s'", identity, name)
        return entry

    def resolve(self, name: str, identity: Listener) -> ListenerEntry | None:
        """Return the entry registered for identity, or None."""
        index = self._index(name, identity)
        if index is None:
            return None
        return self._stores[name][index]

    def unregister(self, name: str, identity: Listener) -> bool:
        """Detach identity's wrapper from `name`. Returns True if it was registered."""
        entry = self.resolve(name, identity)
        if entry is None:
            return False
        self._target.remove_event_listener(name, entry.wrapper, entry.capture)
        self._drop(name, entry)
        logger.debug("Unregistered listener %r from '%s'", identity, name)
        return True

    def release(self, name: str, identity: Listener, wrapper: EventCallback, capture: bool = False) -> None:
        """Detach a specific wrapper; drop the mapping only if it still points to it."""
        self._target.remove_event_listener(name, wrapper, capture)
        entry = self.resolve(name, identity)
        if entry is not None and entry.wrapper is wrapper:
            self._drop(name, entry)

    def _drop(self, name: str, entry: ListenerEntry) -> None:
        store = self._stores[name]
        store.remove(entry)
        if not store:
            del self._stores[name]

    def names(self) -> list[str]:
        return list(self._stores)

    def count(self, name: str) -> int:
        return len(self._stores.get(name, ()))

    def identities(self, name: str | None = None) -> list[Listener] | dict[str, list[Listener]]:
        """
        Registered identities, never wrappers.

        Args:
            name: Restrict to one event name.

        Returns:
            The identities for `name` in registration order, or, without a
            name, a mapping of every event name to its identities.
        """
        if name is not None:
            return [entry.identity for entry in self._stores.get(name, ())]
        return {event: [entry.identity for entry in store] for event, store in self._stores.items()}

    def __len__(self) -> int:
        return sum(len(store) for store in self._stores.values())
