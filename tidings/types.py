"""
Tidings — Typing helpers
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

NameT_contra = TypeVar("NameT_contra", bound=str, contravariant=True)


@runtime_checkable
class TypedEventBroadcaster(Protocol[NameT_contra]):
    """Anything exposing a strictly typed emit(), emitter or not."""

    def emit(self, name: NameT_contra, payload: Any = None) -> Any:  # pragma: no cover - Protocol
        ...
