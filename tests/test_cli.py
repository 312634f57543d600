from pathlib import Path

import pytest

from terago.cli import main
from terago.generate import DEFAULT_TEMPLATE
from terago.meta import VERSION

META_YAML = (
    'title: "Test Technology Radar"\n'
    "quadrants:\n"
    '  - name: "Languages"\n    alias: "languages"\n'
    '  - name: "Frameworks"\n    alias: "frameworks"\n'
    "rings:\n"
    '  - name: "Adopt"\n    alias: "adopt"\n'
    '  - name: "Trial"\n    alias: "trial"\n'
)

FIRST_YAML = (
    "technologies:\n"
    '  - name: "Go"\n    ring: "Adopt"\n    quadrant: "Languages"\n'
    '    description: "Efficient programming language"\n'
)

SECOND_YAML = (
    "technologies:\n"
    '  - name: "Go"\n    ring: "Trial"\n    quadrant: "Languages"\n'
    '  - name: "React"\n    ring: "Trial"\n    quadrant: "Frameworks"\n'
)


@pytest.fixture
def project(tmp_path: Path):
    input_dir = tmp_path / "input"
    input_dir.mkdir()
    (input_dir / "20231201.yaml").write_text(FIRST_YAML, encoding="utf-8")
    (input_dir / "20240101.yaml").write_text(SECOND_YAML, encoding="utf-8")
    meta = tmp_path / "meta.yaml"
    meta.write_text(META_YAML, encoding="utf-8")
    return input_dir, tmp_path / "output", meta


def _args(project, *extra):
    input_dir, output_dir, meta = project
    return ["--input", str(input_dir), "--output", str(output_dir), "--meta", str(meta), *extra]


def test_version_prints_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == VERSION


def test_export_template_round_trip(tmp_path):
    target = tmp_path / "template.html"
    assert main(["--export-template", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == DEFAULT_TEMPLATE


def test_exported_template_can_be_used(tmp_path, project):
    target = tmp_path / "custom.html"
    assert main(["--export-template", str(target)]) == 0
    assert main(_args(project, "--template", str(target))) == 0
    page = (project[1] / "20231201.html").read_text(encoding="utf-8")
    assert "Test Technology Radar" in page


def test_missing_input_fails(project):
    assert main(["--meta", str(project[2])]) == 1


def test_generates_one_page_per_file(project):
    assert main(_args(project)) == 0
    output_dir = project[1]
    assert sorted(p.name for p in output_dir.iterdir()) == ["20231201.html", "20240101.html"]
    assert "Test Technology Radar" in (output_dir / "20240101.html").read_text(encoding="utf-8")


def test_single_dash_flags(project):
    input_dir, output_dir, meta = project
    assert main(["-input", str(input_dir), "-output", str(output_dir), "-meta", str(meta)]) == 0
    assert (output_dir / "20231201.html").exists()


def test_add_changes_and_links(project):
    assert main(_args(project, "--add-changes", "--include-links")) == 0
    page = (project[1] / "20240101.html").read_text(encoding="utf-8")
    assert "Changes in this Radar" in page
    assert "MOVED: Adopt \u2192 Trial" in page
    assert "/Frameworks/React/" in page


def test_existing_pages_kept_without_force(project):
    assert main(_args(project)) == 0
    page = project[1] / "20231201.html"
    page.write_text("kept", encoding="utf-8")

    assert main(_args(project)) == 0
    assert page.read_text(encoding="utf-8") == "kept"

    assert main(_args(project, "--force")) == 0
    assert "Test Technology Radar" in page.read_text(encoding="utf-8")


def test_invalid_ring_fails(project):
    input_dir, output_dir, _ = project
    (input_dir / "20240201.yaml").write_text(
        "technologies:\n  - {name: X, ring: Hold, quadrant: Languages}\n", encoding="utf-8"
    )
    assert main(_args(project)) == 1
    assert not output_dir.exists()


def test_missing_template_fails(tmp_path, project):
    assert main(_args(project, "--template", str(tmp_path / "absent.html"))) == 1