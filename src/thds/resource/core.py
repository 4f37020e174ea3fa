"""The Resource contract.

A Resource is a handle to a named, byte-bearing location - a local file, data bundled
inside a package, a URL, an in-memory buffer, or an already-open stream. It is never
the bytes themselves. Calling code should be written against `Resource` only, and must
treat `url`, `uri`, and `file_handle` as optionally unsupported.

Contract summary:

- `exists`, `is_readable`, `is_open`, `is_file`, `filename`, and `description` never
  raise.
- `is_readable` is never True when `exists` is False.
- `open` is the one byte-stream-producing operation. It is independently re-openable on
  every call, except for a single-use stream-backed resource (`is_open() == True`), whose
  second `open` raises AlreadyOpenedError.
- `create_relative` is pure path algebra: it performs no I/O, and returns a new, unopened
  handle of the same kind, whose own operations will do any checking.
- All failures are raised synchronously; nothing here retries, and a failure of one
  operation does not invalidate the handle for any other.
"""

import abc
import datetime
import typing as ty
from pathlib import Path
from urllib.parse import quote

from . import config
from .channel import StreamChannel
from .errors import (
    FileAccessError,
    NotFoundError,
    RelativeResolutionError,
    UnsupportedLocatorError,
    not_found_translation,
)
from .log import getLogger

READ_CHUNK_SIZE = config.item("thds.resource.read_chunk_size", 64 * 1024, parse=int)
_URI_SAFE = ":/?#[]@!$&'()*+,;=%~"
# RFC 3986 reserved characters, plus '%' so that existing escapes survive.

logger = getLogger(__name__)


class ByteStreamSource(ty.Protocol):
    def open(self) -> ty.BinaryIO:
        """Obtain a binary stream, owned (and to be closed) by the caller."""
        ...


@ty.runtime_checkable
class Resource(ByteStreamSource, ty.Protocol):
    def exists(self) -> bool:
        ...

    def is_readable(self) -> bool:
        ...

    def is_open(self) -> bool:
        ...

    def is_file(self) -> bool:
        ...

    def url(self) -> str:
        ...

    def uri(self) -> str:
        ...

    def file_handle(self) -> Path:
        ...

    def readable_channel(self) -> ty.BinaryIO:
        ...

    def content_length(self) -> int:
        ...

    def last_modified(self) -> datetime.datetime:
        ...

    def create_relative(self, relative_path: str) -> "Resource":
        ...

    def filename(self) -> ty.Optional[str]:
        ...

    def description(self) -> str:
        ...


def encode_uri(url: str) -> str:
    return quote(url, safe=_URI_SAFE)


def utc_timestamp(epoch_seconds: float) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(epoch_seconds, tz=datetime.timezone.utc)


class AbstractResource(abc.ABC):
    """Shared default behavior for Resources. Concrete resources must provide `open` and
    `description`, and override whatever else their medium can do better or differently.
    """

    @abc.abstractmethod
    def open(self) -> ty.BinaryIO:
        ...

    @abc.abstractmethod
    def description(self) -> str:
        ...

    def exists(self) -> bool:
        """Checks the local file if there is one, and otherwise falls back to opening
        (and immediately closing) a stream.
        """
        try:
            if self.is_file():
                return self.file_handle().exists()
            with self.open():
                return True
        except OSError as err:
            logger.debug("Existence check failed", resource=self.description(), error=repr(err))
            return False

    def is_readable(self) -> bool:
        return self.exists()

    def is_open(self) -> bool:
        return False

    def is_file(self) -> bool:
        return False

    def url(self) -> str:
        raise UnsupportedLocatorError(f"{self.description()} cannot be resolved to a URL")

    def uri(self) -> str:
        return encode_uri(self.url())

    def file_handle(self) -> Path:
        raise FileAccessError(f"{self.description()} cannot be resolved to an absolute file path")

    def readable_channel(self) -> ty.BinaryIO:
        return ty.cast(ty.BinaryIO, StreamChannel(self.open()))

    def content_length(self) -> int:
        """Counts by reading the whole stream, which is correct but may be slow."""
        chunk_size = READ_CHUNK_SIZE()
        with not_found_translation(self.description()), self.open() as stream:
            size = 0
            while chunk := stream.read(chunk_size):
                size += len(chunk)
            return size

    def last_modified(self) -> datetime.datetime:
        try:
            path = self.file_handle()
        except FileAccessError as err:
            raise NotFoundError(f"{self.description()} has no modification time") from err
        with not_found_translation(self.description()):
            return utc_timestamp(path.stat().st_mtime)

    def create_relative(self, relative_path: str) -> "Resource":
        raise RelativeResolutionError(f"Cannot create a relative resource for {self.description()}")

    def filename(self) -> ty.Optional[str]:
        return None

    def read_bytes(self) -> bytes:
        with self.open() as stream:
            return stream.read()

    def read_text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self.read_bytes().decode(encoding, errors)

    def __str__(self) -> str:
        return self.description()
