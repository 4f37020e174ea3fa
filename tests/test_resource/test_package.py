import zipfile
from pathlib import Path

import pytest

import thds.resource
from thds.resource import PackageResource, core
from thds.resource.errors import (
    FileAccessError,
    NotFoundError,
    RootEscapeError,
    UnsupportedLocatorError,
)

CORE_PY = Path(core.__file__)


def test_module_file_inside_a_package():
    res = PackageResource("thds.resource", "core.py")

    assert res.exists()
    assert res.is_readable()
    assert res.is_file()
    assert res.content_length() == CORE_PY.stat().st_size
    assert res.read_bytes() == CORE_PY.read_bytes()
    assert res.file_handle() == CORE_PY
    assert res.url() == "file://" + CORE_PY.as_posix()
    assert res.filename() == "core.py"
    assert res.description() == "package resource [thds.resource/core.py]"


def test_of_accepts_modules():
    assert PackageResource.of(thds.resource, "core.py") == PackageResource("thds.resource", "core.py")


def test_path_is_cleaned_and_leading_slash_ignored():
    assert PackageResource("thds.resource", "/log/./kw_logger.py").path == "log/kw_logger.py"


def test_create_relative():
    res = PackageResource("thds.resource", "log/kw_logger.py")

    sibling = res.create_relative("kw_formatter.py")
    assert sibling == PackageResource("thds.resource", "log/kw_formatter.py")
    assert res.create_relative("../core.py").path == "core.py"
    assert res.create_relative("../core.py").exists()


def test_create_relative_never_climbs_above_the_package():
    res = PackageResource("thds.resource", "log/kw_logger.py")
    with pytest.raises(RootEscapeError):
        res.create_relative("../../outside.py")


def test_create_relative_does_not_import_anything(mocker):
    files = mocker.patch("importlib.resources.files", side_effect=AssertionError("no I/O"))
    rel = PackageResource("no.such.package", "a/b.txt").create_relative("c.txt")

    assert rel.path == "a/c.txt"
    files.assert_not_called()


def test_directory_exists_but_is_not_readable():
    res = PackageResource("thds.resource", "log/")

    assert res.exists()
    assert not res.is_readable()
    with pytest.raises(NotFoundError):
        res.open()


def test_missing_resource():
    res = PackageResource("thds.resource", "does-not-exist.txt")

    assert not res.exists()
    assert not res.is_readable()
    with pytest.raises(NotFoundError):
        res.open()
    with pytest.raises(NotFoundError):
        res.file_handle()
    with pytest.raises(NotFoundError):
        res.last_modified()


def test_missing_package_is_not_found_rather_than_an_import_error():
    res = PackageResource("thds.no_such_package_here", "x.txt")

    assert not res.exists()
    assert not res.is_readable()
    assert not res.is_file()
    with pytest.raises(NotFoundError):
        res.open()


@pytest.fixture
def zipped_package(temp_dir, monkeypatch) -> str:
    name = "zipped_resource_pkg"
    archive = temp_dir / "bundle.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(f"{name}/__init__.py", "")
        zf.writestr(f"{name}/data/hello.txt", "hello from a zip")
    monkeypatch.syspath_prepend(str(archive))
    return name


def test_zipped_package_is_readable_but_has_no_locators(zipped_package):
    res = PackageResource(zipped_package, "data/hello.txt")

    assert res.exists()
    assert res.is_readable()
    assert not res.is_file()
    assert res.read_text() == "hello from a zip"
    assert res.content_length() == len("hello from a zip")
    with pytest.raises(UnsupportedLocatorError):
        res.url()
    with pytest.raises(UnsupportedLocatorError):
        res.uri()
    with pytest.raises(FileAccessError):
        res.file_handle()
    with pytest.raises(NotFoundError):
        res.last_modified()
