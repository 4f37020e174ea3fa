"""Pure, '/'-separated path algebra for resources.

Nothing in here touches a filesystem or a network - these functions are only string
manipulation, which is what lets `create_relative` stay free of I/O.
"""

import posixpath
import typing as ty

from .errors import RootEscapeError

SEP = "/"


def clean_path(path: str) -> str:
    """Collapse '.' and '..' segments and duplicate separators.

    A trailing separator is preserved, since it marks a directory-like location that
    relative paths get applied _inside of_ rather than beside. Leading '..' segments
    survive for unrooted paths; at an absolute root they are dropped ('/..' is '/').
    """
    if not path:
        return path
    cleaned = posixpath.normpath(path)
    if cleaned.startswith(SEP * 2):
        cleaned = SEP + cleaned.lstrip(SEP)  # posix allows an implementation-defined '//'
    if cleaned == ".":
        return ""
    if path.endswith(SEP) and not cleaned.endswith(SEP):
        cleaned += SEP
    return cleaned


def apply_relative_path(base: str, relative: str) -> str:
    """Apply `relative` to the directory part of `base`.

    'a/b.txt' + 'c.txt' -> 'a/c.txt'
    'a/dir/' + 'c.txt' -> 'a/dir/c.txt'
    'b.txt' + 'c.txt' -> 'c.txt'

    A leading separator on `relative` does not make it absolute.
    """
    sep_index = base.rfind(SEP)
    if sep_index == -1:
        return relative.lstrip(SEP)
    return base[: sep_index + 1] + relative.lstrip(SEP)


def is_within(root: str, candidate: str) -> bool:
    """Whether the cleaned candidate is the root itself or beneath it.

    An empty root denotes an unrooted, relative base: only a leading '..' (or an
    absolute candidate) escapes it.
    """
    root = clean_path(root)
    candidate = clean_path(candidate)
    if not root:
        return not (candidate == ".." or candidate.startswith("../") or candidate.startswith(SEP))
    if root == SEP:
        return candidate.startswith(SEP)
    root = root.rstrip(SEP)
    return candidate.rstrip(SEP) == root or candidate.startswith(root + SEP)


def ensure_within(root: str, candidate: str, description: str = "") -> str:
    if not is_within(root, candidate):
        raise RootEscapeError(
            f"Path '{candidate}' escapes the root '{root or '.'}'"
            + (f" of {description}" if description else "")
        )
    return clean_path(candidate)


def resolve_relative(
    base: str, relative: str, root: ty.Optional[str] = None, description: str = ""
) -> str:
    """The full `create_relative` path computation: apply, clean, and enforce the root if any."""
    joined = clean_path(apply_relative_path(base, relative))
    if root is not None:
        return ensure_within(root, joined, description)
    return joined


def last_segment(path: str) -> ty.Optional[str]:
    name = posixpath.basename(path.rstrip(SEP))
    return name or None
