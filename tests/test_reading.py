from pathlib import Path

import pytest

from terago.meta import Quadrant, Ring, default_meta
from terago.reading import (
    mark_changes,
    read_meta,
    read_technologies_file,
    read_technologies_files,
)
from terago.technology import Technology, ValidationError

VALID_YAML = (
    'date: "20231201"\ntechnologies:\n  - name: "Go"\n    ring: "Adopt"\n'
    '    quadrant: "Languages"\n    description: "Go programming language"\n'
    '  - name: "React"\n    ring: "Trial"\n    quadrant: "Frameworks"\n'
    '    description: "React framework"'
)

INVALID_RING_YAML = (
    'date: "20231201"\ntechnologies:\n  - name: "Invalid Technology"\n'
    '    ring: "InvalidRing"\n    quadrant: "Languages"\n'
    '    description: "Technology with invalid ring"'
)

INVALID_QUADRANT_YAML = (
    'date: "20231201"\ntechnologies:\n  - name: "Invalid Technology"\n'
    '    ring: "Adopt"\n    quadrant: "InvalidQuadrant"\n'
    '    description: "Technology with invalid quadrant"'
)

INVALID_META_YAML = """
title: "Test Radar"
invalid: yaml: content:
  - this: is
  - not: valid
"""


def _write(directory: Path, name: str, content: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


def _assert_default(meta):
    expected = default_meta()
    assert meta.title == expected.title
    assert meta.description == expected.description
    assert meta.quadrants == expected.quadrants
    assert meta.rings == expected.rings


def test_read_meta_empty_path_gives_defaults():
    _assert_default(read_meta(""))


def test_read_meta_missing_file_gives_defaults(tmp_path):
    _assert_default(read_meta(tmp_path / "non-existent-file.yaml"))


def test_read_meta_invalid_yaml_gives_defaults(tmp_path):
    path = _write(tmp_path, "test-invalid.yaml", INVALID_META_YAML)
    _assert_default(read_meta(path))


def test_read_meta_reads_file(tmp_path):
    path = _write(
        tmp_path,
        "meta.yaml",
        'title: "Test Technology Radar"\n'
        "quadrants:\n"
        '  - name: "Languages"\n    alias: "languages"\n'
        '  - name: "Infrastructure"\n    alias: "infrastructure"\n'
        "rings:\n"
        '  - name: "Adopt"\n    alias: "adopt"\n',
    )
    meta = read_meta(path)
    assert meta.title == "Test Technology Radar"
    assert meta.description == default_meta().description
    assert meta.quadrants == [
        Quadrant("Languages", "languages"),
        Quadrant("Infrastructure", "infrastructure"),
    ]
    assert meta.rings == [Ring("Adopt", "adopt")]
    assert meta.is_valid_quadrant("infrastructure")
    assert not meta.is_valid_ring("Hold")


def test_read_technologies_files_valid(tmp_path):
    _write(tmp_path / "valid", "20231201.yaml", VALID_YAML)
    files = read_technologies_files(tmp_path / "valid", default_meta())
    assert len(files) == 1
    assert files[0].date == "20231201"
    assert [t.name for t in files[0].technologies] == ["Go", "React"]
    assert all(t.is_new for t in files[0].technologies)


def test_read_technologies_files_invalid_ring(tmp_path):
    _write(tmp_path / "invalid_ring", "20231201.yaml", INVALID_RING_YAML)
    with pytest.raises(ValidationError, match="InvalidRing"):
        read_technologies_files(tmp_path / "invalid_ring", default_meta())


def test_read_technologies_files_invalid_quadrant(tmp_path):
    _write(tmp_path / "invalid_quadrant", "20231201.yaml", INVALID_QUADRANT_YAML)
    with pytest.raises(ValidationError, match="InvalidQuadrant"):
        read_technologies_files(tmp_path / "invalid_quadrant", default_meta())


def test_read_technologies_files_orders_and_marks_changes(tmp_path):
    _write(
        tmp_path,
        "20240101.yaml",
        "technologies:\n"
        "  - {name: Go, ring: Trial, quadrant: Languages}\n"
        "  - {name: Rust, ring: Assess, quadrant: Languages}\n",
    )
    _write(tmp_path, "20231201.yaml", VALID_YAML)
    _write(tmp_path, "notes.yaml", "not: a radar")
    _write(tmp_path, "2023120.yaml", "technologies: []")

    files = read_technologies_files(tmp_path, default_meta())
    assert [f.date for f in files] == ["20231201", "20240101"]

    go, rust = files[1].technologies
    assert go.is_moved and not go.is_new
    assert go.previous_ring == "Adopt"
    assert rust.is_new and not rust.is_moved


def test_read_technologies_files_empty_directory(tmp_path):
    assert read_technologies_files(tmp_path, default_meta()) == []


def test_read_technologies_file_bad_structure(tmp_path):
    path = _write(tmp_path, "20231201.yaml", "technologies: just text")
    with pytest.raises(ValueError, match="error parsing YAML"):
        read_technologies_file(path, default_meta())


def test_read_technologies_file_missing(tmp_path):
    with pytest.raises(OSError):
        read_technologies_file(tmp_path / "20231201.yaml", default_meta())


def test_mark_changes():
    previous = [Technology(name="Go", ring="Adopt"), Technology(name="React", ring="Trial")]
    current = [
        Technology(name="Go", ring="Adopt", is_new=True),
        Technology(name="React", ring="Adopt"),
        Technology(name="Vue", ring="Assess"),
    ]
    mark_changes(current, previous)
    go, react, vue = current
    assert (go.is_new, go.is_moved) == (False, False)
    assert (react.is_new, react.is_moved, react.previous_ring) == (False, True, "Trial")
    assert (vue.is_new, vue.is_moved) == (True, False)