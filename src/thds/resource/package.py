"""Data bundled inside an importable package - the Python analogue of a classpath resource.

Access goes through `importlib.resources`, so these work for packages installed as
plain directories as well as for zipped packages (zipapps, zipimport), though only the
former have a URL or a local file path.
"""

import importlib.resources
import types
import typing as ty
from dataclasses import dataclass
from pathlib import Path

from . import files, paths
from .core import AbstractResource
from .errors import (
    FileAccessError,
    NotFoundError,
    ResourceError,
    UnsupportedLocatorError,
    not_found_translation,
)
from .log import getLogger

if ty.TYPE_CHECKING:
    from importlib.abc import Traversable

logger = getLogger(__name__)


@dataclass(frozen=True)
class PackageResource(AbstractResource):
    """`path` is relative to the package directory. It gets cleaned on construction; a
    leading '/' is ignored, and a path climbing above the package raises RootEscapeError.

    Constructing one does not import the package.
    """

    package: str
    path: str = ""

    def __post_init__(self):
        cleaned = paths.ensure_within("", self.path.lstrip(paths.SEP), self.package)
        object.__setattr__(self, "path", cleaned)  # works around dataclass frozen-ness.

    @staticmethod
    def of(anchor: ty.Union[str, types.ModuleType], path: str = "") -> "PackageResource":
        return PackageResource(anchor if isinstance(anchor, str) else anchor.__name__, path)

    def _traversable(self) -> "Traversable":
        try:
            node = importlib.resources.files(self.package)
        except (ImportError, TypeError) as err:
            raise NotFoundError(f"{self.description()} cannot be resolved") from err
        for segment in filter(None, self.path.split(paths.SEP)):
            node = node.joinpath(segment)
        return node

    def _filesystem_path(self) -> ty.Optional[Path]:
        node = self._traversable()
        return node if isinstance(node, Path) else None

    def exists(self) -> bool:
        try:
            node = self._traversable()
            return node.is_file() or node.is_dir()
        except OSError as err:
            logger.debug("Existence check failed", resource=self.description(), error=repr(err))
            return False

    def is_readable(self) -> bool:
        try:
            return self._traversable().is_file()
        except OSError:
            return False

    def is_file(self) -> bool:
        try:
            return self._filesystem_path() is not None
        except ResourceError:
            return False

    def open(self) -> ty.BinaryIO:
        with not_found_translation(self.description()):
            node = self._traversable()
            if not node.is_file():
                raise NotFoundError(f"{self.description()} cannot be opened because it does not exist")
            return ty.cast(ty.BinaryIO, node.open("rb"))

    def url(self) -> str:
        fs_path = self._filesystem_path()
        if fs_path is None:
            raise UnsupportedLocatorError(f"{self.description()} is not on the local filesystem")
        return files.to_uri(fs_path)

    def uri(self) -> str:
        fs_path = self._filesystem_path()
        if fs_path is None:
            raise UnsupportedLocatorError(f"{self.description()} is not on the local filesystem")
        return files.to_encoded_uri(fs_path)

    def file_handle(self) -> Path:
        fs_path = self._filesystem_path()
        if fs_path is None:
            raise FileAccessError(f"{self.description()} is not on the local filesystem")
        if not fs_path.exists():
            raise NotFoundError(f"{self.description()} does not exist")
        return fs_path

    def content_length(self) -> int:
        fs_path = self._filesystem_path()
        if fs_path is None:
            return super().content_length()
        if not fs_path.is_file():
            raise NotFoundError(f"{self.description()} is not a readable file")
        return fs_path.stat().st_size

    def create_relative(self, relative_path: str) -> "PackageResource":
        return PackageResource(self.package, paths.apply_relative_path(self.path, relative_path))

    def filename(self) -> ty.Optional[str]:
        return paths.last_segment(self.path)

    def description(self) -> str:
        return f"package resource [{self.package}/{self.path}]"
