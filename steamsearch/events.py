"""
Search status events and the channel that broadcasts them.

Subscribers are plain callables invoked synchronously, in subscription
order, for every emitted event. There is no buffering or back-pressure;
an event emitted while nobody is subscribed is lost.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class SearchState(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class SearchType(str, Enum):
    IDENTITY_RETRIEVAL = "identity_retrieval"
    IDENTITY_VALIDATION = "identity_validation"
    RESOURCE_FETCH = "resource_fetch"


@dataclass(frozen=True)
class EventDetails:
    result: Any = None
    error: Optional[Exception] = None
    meta: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class SearchEvent:
    state: SearchState
    type: SearchType
    details: EventDetails = field(default_factory=EventDetails)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; errors are reduced to their type and message."""
        details: Dict[str, Any] = {}
        if self.details.result is not None:
            details["result"] = self.details.result
        if self.details.error is not None:
            err = self.details.error
            details["error"] = {"type": type(err).__name__, "message": str(err)}
            kind = getattr(err, "kind", None)
            if kind is not None:
                details["error"]["kind"] = kind.value
        if self.details.meta is not None:
            details["meta"] = {
                k: (v.value if isinstance(v, Enum) else v) for k, v in self.details.meta.items()
            }
        return {"state": self.state.value, "type": self.type.value, "details": details}


Subscriber = Callable[[SearchEvent], None]


class EventChannel:
    """Fire-and-forget broadcast of SearchEvent values."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, event: SearchEvent) -> None:
        # Iterate over a copy so callbacks may unsubscribe themselves
        for callback in list(self._subscribers):
            callback(event)

    def __len__(self) -> int:
        return len(self._subscribers)
