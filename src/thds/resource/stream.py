"""A Resource wrapping a stream that is already open, and can therefore be read only once."""

import datetime
import enum
import threading
import typing as ty

from .core import AbstractResource
from .errors import AlreadyOpenedError, NotFoundError, ResourceError


class StreamState(enum.Enum):
    UNOPENED = "unopened"
    OPENED = "opened"


class StreamResource(AbstractResource):
    """Single-use: exactly one `open` succeeds, handing the wrapped stream to the caller,
    who then owns it. Every later `open` - including from a concurrent racer - raises
    AlreadyOpenedError. The transition is irreversible and observable via `state`.

    Prefer any other kind of Resource where one is available.
    """

    def __init__(self, stream: ty.BinaryIO, label: str = ""):
        self._stream = stream
        self._label = label
        self._state = StreamState.UNOPENED
        self._lock = threading.Lock()

    @property
    def state(self) -> StreamState:
        return self._state

    def exists(self) -> bool:
        return True

    def is_open(self) -> bool:
        return True

    def open(self) -> ty.BinaryIO:
        with self._lock:
            if self._state is StreamState.OPENED:
                raise AlreadyOpenedError(
                    f"{self.description()} has already been opened - do not read it more than once"
                )
            self._state = StreamState.OPENED
        return self._stream

    def content_length(self) -> int:
        raise ResourceError(f"{self.description()} cannot be measured without consuming its stream")

    def last_modified(self) -> datetime.datetime:
        raise NotFoundError(f"{self.description()} has no modification time")

    def description(self) -> str:
        return f"stream resource [{self._label or 'resource loaded through stream'}]"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StreamResource) and other._stream is self._stream

    def __hash__(self) -> int:
        return id(self._stream)

    def __repr__(self) -> str:
        return f"StreamResource({self._stream!r}, label={self._label!r}, state={self._state.value})"
