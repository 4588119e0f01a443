# Tidings package

from .config import VERSION as __version__
from .emitter import EventEmitter
from .errors import InvalidRemovalArguments, PullTimeoutError, TidingsError
from .models import Event, ListenerOptions
from .reserved import ReservedEventEmitter
from .target import EventTarget
from .types import TypedEventBroadcaster

__all__ = [
    "__version__",
    "EventEmitter",
    "ReservedEventEmitter",
    "EventTarget",
    "Event",
    "ListenerOptions",
    "TypedEventBroadcaster",
    "TidingsError",
    "InvalidRemovalArguments",
    "PullTimeoutError",
]
