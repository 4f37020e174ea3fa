import pytest

from thds.resource import BytesResource, DescriptiveResource
from thds.resource.errors import (
    FileAccessError,
    NotFoundError,
    RelativeResolutionError,
    UnsupportedLocatorError,
)


def test_empty_buffer():
    res = BytesResource(b"")

    assert res.exists()
    assert res.is_readable()
    assert not res.is_open()
    assert not res.is_file()
    assert res.content_length() == 0
    assert res.filename() is None
    with pytest.raises(UnsupportedLocatorError):
        res.url()
    with pytest.raises(UnsupportedLocatorError):
        res.uri()


def test_no_modification_time_rather_than_a_sentinel():
    with pytest.raises(NotFoundError):
        BytesResource(b"abc").last_modified()


def test_no_relative_resolution_or_file():
    res = BytesResource(b"abc")
    with pytest.raises(RelativeResolutionError):
        res.create_relative("sibling")
    with pytest.raises(FileAccessError):
        res.file_handle()


def test_every_open_is_independent():
    res = BytesResource(bytearray(b"abcdef"))
    with res.open() as first, res.open() as second:
        assert first.read(3) == b"abc"
        assert second.read() == b"abcdef"
        assert first.read() == b"def"


def test_equality_is_by_content_only():
    assert BytesResource(b"same", label="one") == BytesResource(b"same", label="two")
    assert BytesResource(b"same") != BytesResource(b"different")


def test_description():
    assert BytesResource(b"").description() == "byte array resource [resource loaded from byte array]"
    assert BytesResource(b"", label="config blob").description() == "byte array resource [config blob]"


def test_descriptive_placeholder_never_exists():
    res = DescriptiveResource("placeholder for a missing template")

    assert not res.exists()
    assert not res.is_readable()
    assert res.description() == "placeholder for a missing template"
    assert res.filename() is None
    with pytest.raises(NotFoundError):
        res.open()
    with pytest.raises(NotFoundError):
        res.content_length()
    with pytest.raises(NotFoundError):
        res.last_modified()
    with pytest.raises(FileAccessError):
        res.file_handle()
