"""A uniform, read-only Resource abstraction over local files, package data, URLs,
in-memory buffers, and already-open streams.
"""

from . import config, errors, log, paths  # noqa: F401
from .channel import StreamChannel  # noqa: F401
from .core import AbstractResource, ByteStreamSource, Resource  # noqa: F401
from .descriptive import DescriptiveResource  # noqa: F401
from .errors import (  # noqa: F401
    AlreadyOpenedError,
    FileAccessError,
    NotFoundError,
    RelativeResolutionError,
    ResourceError,
    RootEscapeError,
    UnsupportedLocatorError,
)
from .file import FileResource  # noqa: F401
from .memory import BytesResource  # noqa: F401
from .package import PackageResource  # noqa: F401
from .stream import StreamResource, StreamState  # noqa: F401
from .url import UrlResource  # noqa: F401
