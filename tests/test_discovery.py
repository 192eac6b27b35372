"""Tests for locating and loading sysconfigdata files."""

from __future__ import annotations

from pathlib import Path

import pytest

from sysconfigdata import ParserConfig, load
from sysconfigdata.discovery import (
    NAME_ENV,
    OVERRIDE_ENV,
    find_sysconfigdata,
    read_source,
    resolve_location,
)
from sysconfigdata.errors import SysconfigNotFoundError, UndefinedReferenceError
from sysconfigdata.resolver import MissingKeyPolicy

FIXTURE = Path(__file__).parent / "fixtures" / "_sysconfigdata__darwin_darwin.py"


def _write(directory: Path, name: str, body: str = "build_time_vars = {}\n") -> Path:
    path = directory / name
    path.write_text(body, encoding="utf-8")
    return path


def test_first_sorted_match_wins(tmp_path: Path) -> None:
    _write(tmp_path, "_sysconfigdata_d_linux_x86_64-linux-gnu.py")
    expected = _write(tmp_path, "_sysconfigdata__linux_x86_64-linux-gnu.py")
    _write(tmp_path, "sysconfig.py")

    assert find_sysconfigdata([tmp_path]) == expected


def test_search_dirs_are_tried_in_order(tmp_path: Path) -> None:
    """Missing and empty directories are skipped."""
    empty = tmp_path / "empty"
    empty.mkdir()
    second = tmp_path / "second"
    second.mkdir()
    expected = _write(second, "_sysconfigdata__darwin_darwin.py")

    assert find_sysconfigdata([tmp_path / "absent", empty, second]) == expected


def test_override_environment_variable(tmp_path: Path) -> None:
    _write(tmp_path, "_sysconfigdata__linux_x.py")
    override = _write(tmp_path, "custom.py")

    found = find_sysconfigdata([tmp_path], environ={OVERRIDE_ENV: str(override)})

    assert found == override
    with pytest.raises(SysconfigNotFoundError):
        find_sysconfigdata([tmp_path], environ={OVERRIDE_ENV: str(tmp_path / "gone.py")})


def test_module_name_environment_variable(tmp_path: Path) -> None:
    """The cross-compilation module name narrows the search."""
    _write(tmp_path, "_sysconfigdata__linux_a.py")
    wanted = _write(tmp_path, "_sysconfigdata__linux_b.py")

    found = find_sysconfigdata([tmp_path], environ={NAME_ENV: "_sysconfigdata__linux_b"})

    assert found == wanted


def test_nothing_found(tmp_path: Path) -> None:
    with pytest.raises(SysconfigNotFoundError) as excinfo:
        find_sysconfigdata([tmp_path])

    assert isinstance(excinfo.value, FileNotFoundError)
    assert str(tmp_path) in str(excinfo.value)


def test_resolve_location_accepts_file_or_directory(tmp_path: Path) -> None:
    path = _write(tmp_path, "_sysconfigdata__linux_x.py")

    assert resolve_location(path) == path
    assert resolve_location(tmp_path) == path


def test_read_source_and_load_fixture() -> None:
    assert read_source(FIXTURE).startswith("# system configuration")

    store = load(FIXTURE.parent)

    assert store.get_scalar("SOABI") == "cpython-38-darwin"


def test_load_passes_environ_to_resolution(tmp_path: Path) -> None:
    """The environ fallback only comes from the caller-supplied mapping."""
    path = _write(tmp_path, "_sysconfigdata__x.py", "build_time_vars = {'A': '$(DESTDIR)/usr'}\n")
    config = ParserConfig(missing_key_policy=MissingKeyPolicy.ENVIRON)

    store = load(path, config=config, environ={"DESTDIR": "/stage"})

    assert store.get_scalar("A") == "/stage/usr"
    with pytest.raises(UndefinedReferenceError):
        load(path, config=config)
