"""Errors raised by Resource operations.

Everything derives from ResourceError, which is itself an OSError, so a caller may catch
a single type for 'anything went wrong reaching the underlying data'.
"""

import typing as ty
from contextlib import contextmanager


class ResourceError(OSError):
    """Generic I/O failure while probing metadata or opening a stream."""


class NotFoundError(ResourceError, FileNotFoundError):
    """The addressed location does not currently exist or cannot be opened."""


class AlreadyOpenedError(ResourceError):
    """A single-use, stream-backed resource was opened a second time."""


class UnsupportedLocatorError(ResourceError):
    """The resource has no URL/URI identity."""


class FileAccessError(ResourceError):
    """The resource cannot be resolved to a local filesystem path."""


class RelativeResolutionError(ResourceError):
    """The resource has no hierarchical path to resolve a relative path against."""


class RootEscapeError(RelativeResolutionError):
    """A relative path would climb above the root the resource is confined to."""


@contextmanager
def not_found_translation(description: str) -> ty.Iterator[None]:
    """Re-raise low-level 'missing' errors as NotFoundError, naming the resource.

    ResourceErrors pass through untouched. Other OSErrors are left alone as well, since
    they already are the generic I/O kind.
    """
    try:
        yield
    except ResourceError:
        raise
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as err:
        raise NotFoundError(f"{description} cannot be opened because it does not exist") from err
