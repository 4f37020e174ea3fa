"""Resources addressed by a URL, fetched with `requests`.

`file:` URLs never touch the network - they delegate to an equivalent FileResource.
"""

import datetime
import typing as ty
from contextlib import contextmanager
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from pathlib import Path
from urllib.parse import unquote, urljoin, urlsplit, urlunsplit

import requests

from . import config, files, paths
from .core import AbstractResource
from .errors import (
    FileAccessError,
    NotFoundError,
    RelativeResolutionError,
    ResourceError,
)
from .file import FileResource
from .log import getLogger

_config = config.in_module(__name__)
TIMEOUT_SECONDS = _config("timeout_seconds", 30.0, parse=float)
USER_AGENT = _config("user_agent", "thds.resource", parse=str)

_NOT_FOUND_STATUSES = (404, 410)
_HEAD_UNSUPPORTED_STATUSES = (405, 501)

logger = getLogger(__name__)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


@contextmanager
def http_error_translation(description: str) -> ty.Iterator[None]:
    """404/410 become NotFoundError; any other requests failure becomes a ResourceError."""
    try:
        yield
    except requests.HTTPError as err:
        if err.response is not None and err.response.status_code in _NOT_FOUND_STATUSES:
            raise NotFoundError(f"{description} cannot be opened because it does not exist") from err
        raise ResourceError(f"{description} could not be read: {err}") from err
    except requests.RequestException as err:
        raise ResourceError(f"{description} could not be reached: {err}") from err


def _request_kwargs() -> ty.Dict[str, ty.Any]:
    return dict(
        timeout=TIMEOUT_SECONDS(),
        headers={"User-Agent": USER_AGENT(), "Accept-Encoding": "identity"},
        allow_redirects=True,
    )


def _head(url: str) -> requests.Response:
    logger.debug("HEAD", url=url)
    return requests.head(url, **_request_kwargs())


def _get_streaming(url: str) -> requests.Response:
    logger.debug("GET", url=url)
    return requests.get(url, stream=True, **_request_kwargs())


def _clean_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.scheme:
        raise ValueError(f"'{url}' is not a URL - it has no scheme")
    if files.is_file_uri(url) and not parts.path:
        raise ValueError(f"'{url}' does not name a local path")
    return urlunsplit(parts._replace(path=paths.clean_path(parts.path)))


@dataclass(frozen=True)
class UrlResource(AbstractResource):
    """`location` is the URL, with '.' and '..' segments in its path cleaned away."""

    location: str

    def __post_init__(self):
        object.__setattr__(self, "location", _clean_url(self.location))

    @staticmethod
    def of(url: str) -> "UrlResource":
        return UrlResource(url)

    def _file_delegate(self) -> ty.Optional[FileResource]:
        if not files.is_file_uri(self.location):
            return None
        return FileResource.of(files.path_from_uri(self.location))

    def _probe(self) -> requests.Response:
        """HEAD, falling back to a streamed (and immediately closed) GET for servers
        that refuse HEAD.
        """
        response = _head(self.location)
        if response.status_code in _HEAD_UNSUPPORTED_STATUSES:
            response = _get_streaming(self.location)
            response.close()
        return response

    def exists(self) -> bool:
        delegate = self._file_delegate()
        if delegate is not None:
            return delegate.exists()
        try:
            return _is_success(self._probe().status_code)
        except requests.RequestException as err:
            logger.debug("Existence check failed", resource=self.description(), error=repr(err))
            return False

    def is_readable(self) -> bool:
        delegate = self._file_delegate()
        if delegate is not None:
            return delegate.is_readable()
        return self.exists()

    def is_file(self) -> bool:
        return files.is_file_uri(self.location)

    def open(self) -> ty.BinaryIO:
        delegate = self._file_delegate()
        if delegate is not None:
            return delegate.open()
        with http_error_translation(self.description()):
            response = _get_streaming(self.location)
            try:
                response.raise_for_status()
            except requests.HTTPError:
                response.close()
                raise
        response.raw.decode_content = True
        return ty.cast(ty.BinaryIO, response.raw)

    def url(self) -> str:
        return self.location

    def file_handle(self) -> Path:
        delegate = self._file_delegate()
        if delegate is None:
            raise FileAccessError(f"{self.description()} cannot be resolved to an absolute file path")
        return delegate.file_handle()

    def _head_headers(self) -> ty.Mapping[str, str]:
        with http_error_translation(self.description()):
            response = self._probe()
            response.raise_for_status()
            return response.headers

    def content_length(self) -> int:
        delegate = self._file_delegate()
        if delegate is not None:
            return delegate.content_length()
        headers = self._head_headers()
        length = headers.get("Content-Length")
        # Content-Length counts encoded bytes, but open() yields decoded ones.
        encoded = headers.get("Content-Encoding", "identity").strip().lower() not in ("", "identity")
        if length is not None and length.isdigit() and not encoded:
            return int(length)
        return super().content_length()

    def last_modified(self) -> datetime.datetime:
        delegate = self._file_delegate()
        if delegate is not None:
            return delegate.last_modified()
        header = self._head_headers().get("Last-Modified")
        if not header:
            raise NotFoundError(f"{self.description()} does not report a modification time")
        try:
            modified = parsedate_to_datetime(header)
        except (TypeError, ValueError) as err:
            raise NotFoundError(f"{self.description()} reported an unparseable Last-Modified") from err
        if modified.tzinfo is None:
            modified = modified.replace(tzinfo=datetime.timezone.utc)
        return modified

    def create_relative(self, relative_path: str) -> "UrlResource":
        relative = relative_path.lstrip(paths.SEP)
        parts = urlsplit(relative)
        if parts.scheme or parts.netloc:
            raise RelativeResolutionError(
                f"'{relative_path}' is not a relative path"
                f" and cannot be resolved against {self.description()}"
            )
        # '#' is legal in file names, and must not start a fragment here.
        return UrlResource(urljoin(self.location, relative.replace("#", "%23")))

    def filename(self) -> ty.Optional[str]:
        return paths.last_segment(unquote(urlsplit(self.location).path))

    def description(self) -> str:
        return f"URL [{self.location}]"
