"""
Tidings — Pydantic models
Event records and listener options.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr


class ListenerOptions(BaseModel):
    """Options accepted by every registration call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    once: bool = False
    capture: bool = False

    @classmethod
    def coerce(cls, options: OptionsLike = None, **overrides: bool) -> ListenerOptions:
        """
        Normalize the accepted option shapes into a ListenerOptions.

        A bare bool means `capture`, as with DOM event targets. Keyword
        overrides win over whatever the options carried.
        """
        if options is None:
            opts = cls()
        elif isinstance(options, cls):
            opts = options
        elif isinstance(options, bool):
            opts = cls(capture=options)
        elif isinstance(options, Mapping):
            opts = cls.model_validate(dict(options))
        else:
            opts = cls.model_validate(options)
        if overrides:
            opts = opts.model_copy(update=overrides)
        return opts


OptionsLike = Union[ListenerOptions, Mapping[str, Any], bool, None]


class Event(BaseModel):
    """
    A single occurrence of a named event.

    The record is immutable; only a cancelable event carries mutable state,
    the flag set by prevent_default().
    """

    model_config = ConfigDict(frozen=True)

    name: str
    payload: Any = None
    cancelable: bool = False

    _canceled: bool = PrivateAttr(default=False)

    @property
    def default_prevented(self) -> bool:
        return self._canceled

    def prevent_default(self) -> None:
        """Mark the event as cancelled. Ignored unless the event is cancelable."""
        if self.cancelable:
            self._canceled = True

    def _reset(self) -> None:
        self._canceled = False
