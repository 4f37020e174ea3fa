import datetime
import io
import os
import typing as ty
from dataclasses import dataclass
from pathlib import Path

from . import files, paths
from .core import AbstractResource, utc_timestamp
from .errors import NotFoundError, not_found_translation


@dataclass(frozen=True)
class FileResource(AbstractResource):
    """A Resource for a path on the local filesystem.

    The path is kept as a cleaned, absolute, '/'-separated string, and a trailing
    separator is significant: relative paths get applied inside a 'dir/' but beside a
    'file'. If a root is given, `create_relative` will refuse to climb above it.

    Construct via `of`, which normalizes; constructing a FileResource never checks that
    the file exists.
    """

    path: str
    root: ty.Optional[str] = None

    @staticmethod
    def of(path: files.StrOrPath, root: ty.Optional[files.StrOrPath] = None) -> "FileResource":
        abs_path = files.absolute_posix_path(path)
        if root is None:
            return FileResource(abs_path)
        abs_root = files.absolute_posix_path(root)
        return FileResource(paths.ensure_within(abs_root, abs_path), abs_root)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def is_readable(self) -> bool:
        try:
            return os.access(self.path, os.R_OK) and not os.path.isdir(self.path)
        except (OSError, ValueError):
            # e.g. a NUL byte in the path
            return False

    def is_file(self) -> bool:
        return True

    def open(self) -> ty.BinaryIO:
        with not_found_translation(self.description()):
            return open(self.path, "rb")

    def readable_channel(self) -> ty.BinaryIO:
        with not_found_translation(self.description()):
            return ty.cast(ty.BinaryIO, io.FileIO(self.path, "r"))

    def url(self) -> str:
        return files.to_uri(self.path)

    def uri(self) -> str:
        return files.to_encoded_uri(self.path)

    def file_handle(self) -> Path:
        if not os.path.exists(self.path):
            raise NotFoundError(f"{self.description()} does not exist")
        return Path(self.path)

    def content_length(self) -> int:
        with not_found_translation(self.description()):
            return os.stat(self.path).st_size

    def last_modified(self) -> datetime.datetime:
        with not_found_translation(self.description()):
            return utc_timestamp(os.stat(self.path).st_mtime)

    def create_relative(self, relative_path: str) -> "FileResource":
        return FileResource(
            paths.resolve_relative(self.path, relative_path, self.root, self.description()),
            self.root,
        )

    def filename(self) -> ty.Optional[str]:
        return paths.last_segment(self.path)

    def description(self) -> str:
        return f"file [{self.path}]"
