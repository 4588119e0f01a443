"""
Tidings — Exceptions
"""

from __future__ import annotations

from typing import Any


class TidingsError(Exception):
    """Base error class for Tidings."""

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidRemovalArguments(TidingsError, TypeError):
    """off() was called with an argument combination it does not support."""


class PullTimeoutError(TidingsError, TimeoutError):
    """A pull() deadline elapsed before the awaited event was emitted."""

    def __init__(self, name: str, timeout: float):
        super().__init__(f"Timed out after {timeout}s waiting for {name!r}", detail={"name": name, "timeout": timeout})
        self.name = name
        self.timeout = timeout
