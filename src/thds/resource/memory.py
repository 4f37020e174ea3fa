import datetime
import io
import typing as ty
from dataclasses import dataclass, field

from .core import AbstractResource
from .errors import NotFoundError


@dataclass(frozen=True)
class BytesResource(AbstractResource):
    """An in-memory buffer. Always exists, re-openable without limit, and has no locator,
    no file, no filename, and no modification time.

    Equality is by content only; the label is just for diagnostics.
    """

    data: bytes
    label: str = field(default="", compare=False)

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    def exists(self) -> bool:
        return True

    def open(self) -> ty.BinaryIO:
        return io.BytesIO(self.data)

    def content_length(self) -> int:
        return len(self.data)

    def last_modified(self) -> datetime.datetime:
        # no meaningful answer exists, and a sentinel would be silently wrong.
        raise NotFoundError(f"{self.description()} has no modification time")

    def read_bytes(self) -> bytes:
        return self.data

    def description(self) -> str:
        return f"byte array resource [{self.label or 'resource loaded from byte array'}]"
