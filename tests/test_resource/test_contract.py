"""Properties every kind of Resource must share, regardless of the medium behind it."""

import io
import typing as ty

import pytest
import requests
from urllib3.response import HTTPResponse

from thds.resource import (
    AlreadyOpenedError,
    BytesResource,
    DescriptiveResource,
    FileResource,
    PackageResource,
    RelativeResolutionError,
    Resource,
    StreamResource,
    UrlResource,
)

ResourceFactory = ty.Callable[[], Resource]


@pytest.fixture
def offline_http(mocker):
    def respond(status: int) -> requests.Response:
        response = requests.Response()
        response.status_code = status
        response.raw = HTTPResponse(body=io.BytesIO(b"remote"), status=status, preload_content=False)
        return response

    def by_url(url: str, **kwargs) -> requests.Response:
        return respond(404 if "missing" in url else 200)

    mocker.patch.object(requests, "head", side_effect=by_url)
    mocker.patch.object(requests, "get", side_effect=by_url)


@pytest.fixture
def every_kind(temp_file, temp_dir, offline_http) -> ty.Dict[str, ResourceFactory]:
    existing = temp_file(b"file bytes")
    return {
        "file": lambda: FileResource.of(existing),
        "missing-file": lambda: FileResource.of(temp_dir / "missing.txt"),
        "directory": lambda: FileResource.of(temp_dir),
        "package": lambda: PackageResource("thds.resource", "core.py"),
        "missing-package-data": lambda: PackageResource("thds.resource", "missing.txt"),
        "url": lambda: UrlResource("https://example.com/present.txt"),
        "missing-url": lambda: UrlResource("https://example.com/missing.txt"),
        "bytes": lambda: BytesResource(b"in memory"),
        "empty-bytes": lambda: BytesResource(b""),
        "stream": lambda: StreamResource(io.BytesIO(b"streamed")),
        "descriptive": lambda: DescriptiveResource("nothing here"),
    }


KINDS = [
    "file",
    "missing-file",
    "directory",
    "package",
    "missing-package-data",
    "url",
    "missing-url",
    "bytes",
    "empty-bytes",
    "stream",
    "descriptive",
]
REOPENABLE = ["file", "package", "url", "bytes", "empty-bytes"]
HIERARCHICAL = ["file", "missing-file", "directory", "package", "url", "missing-url"]


@pytest.mark.parametrize("kind", KINDS)
def test_is_a_resource(every_kind, kind):
    assert isinstance(every_kind[kind](), Resource)


@pytest.mark.parametrize("kind", KINDS)
def test_not_existing_implies_not_readable(every_kind, kind):
    res = every_kind[kind]()
    if not res.exists():
        assert not res.is_readable()


@pytest.mark.parametrize("kind", KINDS)
def test_probes_never_raise(every_kind, kind):
    res = every_kind[kind]()
    res.exists()
    res.is_readable()
    res.filename()
    assert isinstance(res.is_open(), bool)
    assert isinstance(res.is_file(), bool)
    assert res.description() == res.description() == str(res)


@pytest.mark.parametrize("kind", REOPENABLE)
def test_reopenable_streams_are_independent_and_complete(every_kind, kind):
    res = every_kind[kind]()
    length = res.content_length()

    assert not res.is_open()
    for _ in range(3):
        with res.open() as stream:
            assert len(stream.read()) == length


@pytest.mark.parametrize("kind", HIERARCHICAL)
def test_create_relative_is_stable_and_same_kind(every_kind, kind):
    res = every_kind[kind]()
    first = res.create_relative("sibling.txt")
    second = res.create_relative("sibling.txt")

    assert type(first) is type(res)
    assert first == second
    assert first.description() == second.description()
    assert not first.is_open()


@pytest.mark.parametrize("kind", ["bytes", "stream", "descriptive"])
def test_non_hierarchical_kinds_refuse_relative_resolution(every_kind, kind):
    with pytest.raises(RelativeResolutionError):
        every_kind[kind]().create_relative("sibling.txt")


def test_single_use_kind(every_kind):
    res = every_kind["stream"]()
    assert res.is_open()
    res.open()
    with pytest.raises(AlreadyOpenedError):
        res.open()
