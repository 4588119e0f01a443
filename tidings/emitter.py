"""
Tidings — Event emitter
Typed publish/subscribe on top of an EventTarget.

Usage:
    from tidings import EventEmitter

    emitter: EventEmitter[Literal["saved", "deleted"]] = EventEmitter()
    emitter.on("saved", print).emit("saved", {"id": 1})
    payload = await emitter.pull("deleted", timeout=5)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, Callable, Generic, TypeVar, Union

from .adapters import once_remover, payload_passer
from .errors import InvalidRemovalArguments, PullTimeoutError
from .models import Event, ListenerOptions, OptionsLike
from .registry import Listener, ListenerRegistry
from .target import EventCallback, EventTarget

logger = logging.getLogger("tidings.emitter")

NameT = TypeVar("NameT", bound=str)
_E = TypeVar("_E", bound="EventEmitter[Any]")

Names = Union[NameT, Iterable[NameT]]


def _as_names(names: Names[str]) -> list[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


def _removal_names(names: Any) -> list[str]:
    if isinstance(names, str):
        return [names]
    if isinstance(names, Iterable):
        names = list(names)
        if all(isinstance(name, str) for name in names):
            return names
    raise InvalidRemovalArguments(f"Unknown case for removing event: names={names!r}", detail=names)


class EventEmitter(Generic[NameT]):
    """
    Event emitter with payload listeners, one-shot listeners and awaitable events.

    The type parameter is the set of event names the emitter knows about,
    usually a Literal. Every mutating method returns the emitter so calls
    can be chained.

    Each emit() runs the listeners registered when it started: listeners
    removed mid-emit are skipped, listeners added mid-emit wait for the next.
    Listeners match by identity (bound methods by instance and function),
    so any callable can register, hashable or not.

    Args:
        listener_errors: "raise" to propagate listener exceptions out of
            emit() (default from config), "log" to log them and keep going.
    """

    def __init__(self, listener_errors: str | None = None) -> None:
        self._target = EventTarget(listener_errors)
        self._registry = ListenerRegistry(self._target)

    @staticmethod
    def create_event(name: str, payload: Any = None, cancelable: bool = False) -> Event:
        """Build an event record ready for dispatch_event()."""
        return Event(name=name, payload=payload, cancelable=cancelable)

    # ── Registration ─────────────────────────────────────────────────────────

    def _attach(self, name: str, identity: Listener, wrapper: EventCallback, opts: ListenerOptions) -> None:
        if opts.once:
            capture = opts.capture

            def release(used: EventCallback) -> None:
                self._registry.release(name, identity, used, capture)

            wrapper = once_remover(wrapper, release)
        self._registry.register(name, identity, wrapper, opts.capture)

    def add_event_listener(
        self: _E,
        name: NameT,
        callback: Callable[[Event], Any],
        options: OptionsLike = None,
    ) -> _E:
        """
        Add a callback that receives the full Event record.

        With `once` set, the callback is removed after its first call but
        stays the key used to remove it before that.
        """
        self._attach(name, callback, callback, ListenerOptions.coerce(options))
        return self

    def on(
        self: _E,
        names: Names[NameT],
        callback: Callable[[Any], Any],
        options: OptionsLike = None,
    ) -> _E:
        """
        Add a callback that receives only the payload, for one or more events.

        Args:
            names: An event name or an iterable of event names.
            callback: Called with the payload of each matching event.
            options: ListenerOptions, a mapping, or a bool meaning `capture`.
        """
        opts = ListenerOptions.coerce(options)
        for name in _as_names(names):
            self._attach(name, callback, payload_passer(callback), opts)
        return self

    def once(
        self: _E,
        names: Names[NameT],
        callback: Callable[[Any], Any],
        options: OptionsLike = None,
    ) -> _E:
        """Like on(), but each registration is removed after it fires once."""
        return self.on(names, callback, ListenerOptions.coerce(options, once=True))

    def subscribe(
        self,
        name: NameT,
        callback: Callable[[Any], Any],
        options: OptionsLike = None,
    ) -> Callable[[], None]:
        """on() for pub/sub code: returns a function that removes the listener."""
        self.on(name, callback, options)

        def unsubscribe() -> None:
            self.off(name, callback)

        return unsubscribe

    # ── Removal ──────────────────────────────────────────────────────────────

    def remove_event_listener(
        self: _E,
        name: NameT,
        callback: Listener,
        options: OptionsLike = None,
    ) -> _E:
        """
        Remove the listener registered under `callback` for `name`.

        Unknown callbacks are ignored. `options` is accepted for EventTarget
        compatibility; the capture flag used at registration is reused.
        """
        self._registry.unregister(name, callback)
        return self

    def off(self: _E, names: Names[NameT] | None = None, callback: Listener | None = None) -> _E:
        """
        Remove listeners.

            off()                    every listener of every event
            off(name) / off(names)   every listener of the given event(s)
            off(name, callback)      one listener of the given event(s)

        Raises:
            InvalidRemovalArguments: for any other combination of arguments.
        """
        if names is None and callback is None:
            for name in self._registry.names():
                self._remove_all(name)
            logger.debug("Removed all listeners")
            return self
        if names is None:
            raise InvalidRemovalArguments("Unknown case for removing event: callback given without event names")

        for name in _removal_names(names):
            if callback is None:
                self._remove_all(name)
            else:
                self._registry.unregister(name, callback)
        return self

    def _remove_all(self, name: str) -> None:
        identities = self._registry.identities(name)
        for identity in identities:
            self._registry.unregister(name, identity)
        logger.debug("Removed %d listeners from '%s'", len(identities), name)

    # ── Dispatch ─────────────────────────────────────────────────────────────

    def dispatch_event(self, event: Event) -> bool:
        """
        Dispatch a pre-built event record.

        Returns:
            False if the event is cancelable and a listener called
            prevent_default(), True otherwise.
        """
        return self._target.dispatch_event(event)

    def emit(self: _E, name: NameT, payload: Any = None) -> _E:
        """Emit `name` with `payload`. All listeners run before this returns."""
        return self._emit(name, payload)

    def dispatch(self: _E, name: NameT, payload: Any = None) -> _E:
        """Alias of emit()."""
        return self.emit(name, payload)

    def publish(self: _E, name: NameT, payload: Any = None) -> _E:
        """Alias of emit(), for pub/sub conventions."""
        return self.emit(name, payload)

    def _emit(self: _E, name: str, payload: Any = None) -> _E:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Emitting '%s' to %d listeners", name, self._registry.count(name))
        self.dispatch_event(self.create_event(name, payload))
        return self

    # ── Await ────────────────────────────────────────────────────────────────

    def pull(self, name: NameT, timeout: float | None = None) -> asyncio.Future[Any]:
        """
        Wait for the next occurrence of `name` and return its payload.

        The listener is registered immediately, so an emit that happens
        before the future is awaited still resolves it. Must be called with
        a running event loop.

        Args:
            name: Event to wait for.
            timeout: Seconds to wait before failing; None waits forever.

        Returns:
            A future resolving to the payload. It fails with
            PullTimeoutError if the timeout elapses first. Cancelling it
            removes the pending listener.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()
        timer: asyncio.TimerHandle | None = None

        def resolve(payload: Any) -> None:
            if timer is not None:
                timer.cancel()
            if not future.done():
                future.set_result(payload)

        def expire() -> None:
            self._registry.unregister(name, resolve)
            if not future.done():
                logger.info("pull('%s') timed out after %ss", name, timeout)
                future.set_exception(PullTimeoutError(name, timeout))

        def abandon(done: asyncio.Future[Any]) -> None:
            if done.cancelled():
                if timer is not None:
                    timer.cancel()
                self._registry.unregister(name, resolve)

        self.once(name, resolve)
        if timeout is not None:
            timer = loop.call_later(timeout, expire)
        future.add_done_callback(abandon)
        return future

    # ── Introspection ────────────────────────────────────────────────────────

    def get_listeners(self, name: NameT | None = None) -> list[Listener] | dict[str, list[Listener]]:
        """
        Registered callbacks, as passed to on()/once()/add_event_listener().

        Args:
            name: Restrict to one event.

        Returns:
            The callbacks for `name` in registration order, or a mapping of
            every event name with listeners to its callbacks.
        """
        return self._registry.identities(name)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} events={len(self._registry.names())} "
            f"listeners={len(self._registry)}>"
        )
