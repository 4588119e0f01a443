"""
Tidings — Reserved events
An emitter whose event space is split in two:
  - public events, emittable by anyone holding the emitter
  - reserved events, emittable only by the subclass that owns them

Both kinds can be listened to (on/once/add_event_listener/subscribe/pull).
The split is enforced by type checkers through the emit() signature;
there is no runtime check.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar, Union

from .emitter import EventEmitter

logger = logging.getLogger("tidings.reserved")

EmitNameT = TypeVar("EmitNameT", bound=str)
ReservedNameT = TypeVar("ReservedNameT", bound=str)
_R = TypeVar("_R", bound="ReservedEventEmitter[Any, Any]")


class ReservedEventEmitter(
    EventEmitter[Union[EmitNameT, ReservedNameT]],
    Generic[EmitNameT, ReservedNameT],
):
    """
    EventEmitter with owner-only events.

    Example:
        class Connection(ReservedEventEmitter[Literal["message"], Literal["connect", "disconnect"]]):
            def open(self) -> None:
                self._emit_reserved("connect")

        conn = Connection()
        conn.on("connect", on_connect)   # fine
        conn.emit("message", "hi")       # fine
        conn.emit("connect")             # rejected by the type checker
    """

    def emit(self: _R, name: EmitNameT, payload: Any = None) -> _R:  # type: ignore[override]
        """Emit a public event."""
        return self._emit(name, payload)

    def dispatch(self: _R, name: EmitNameT, payload: Any = None) -> _R:  # type: ignore[override]
        """Alias of emit()."""
        return self.emit(name, payload)

    def publish(self: _R, name: EmitNameT, payload: Any = None) -> _R:  # type: ignore[override]
        """Alias of emit(), for pub/sub conventions."""
        return self.emit(name, payload)

    def _emit_reserved(self: _R, name: ReservedNameT, payload: Any = None) -> _R:
        """Emit a reserved event. Only the owning subclass should call this."""
        logger.debug("Emitting reserved event '%s'", name)
        return self._emit(name, payload)

    def _emit_untyped(self: _R, name: str, payload: Any = None) -> _R:
        """Emit any event name, bypassing the typed signatures."""
        return self._emit(name, payload)
