"""File-URI helpers shared by the file-backed resources."""

import os
import typing as ty
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .paths import SEP, clean_path

FILE_SCHEME = "file://"
StrOrPath = ty.Union[str, os.PathLike]


def is_file_uri(uri: str) -> bool:
    return uri.startswith("file:")


def path_from_uri(uri: str) -> str:
    """The local path named by a file: URI, with any percent-escapes decoded."""
    if not is_file_uri(uri):
        return uri
    str_path = unquote(urlsplit(uri).path)
    if not str_path:
        raise ValueError(f"'{uri}' does not name a local path")
    return str_path


def absolute_posix_path(path: StrOrPath) -> str:
    """A cleaned, absolute, '/'-separated version of the path.

    Unlike Path.resolve, this does not follow symlinks, so the only thing it asks the OS
    for is the current working directory.
    """
    str_path = os.fspath(path)
    if is_file_uri(str_path):
        str_path = path_from_uri(str_path)
    if os.sep != SEP:
        str_path = str_path.replace(os.sep, SEP)
    if not os.path.isabs(str_path):
        str_path = os.getcwd().replace(os.sep, SEP).rstrip(SEP) + SEP + str_path
    return clean_path(str_path)


def to_uri(path: StrOrPath) -> str:
    """The plain file URL form - no percent-encoding is applied."""
    return FILE_SCHEME + absolute_posix_path(path)


def to_encoded_uri(path: StrOrPath) -> str:
    """The RFC 3986 form, with unsafe characters percent-encoded."""
    return Path(absolute_posix_path(path)).as_uri()
