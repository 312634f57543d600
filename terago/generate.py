"""Turning technology files into radar HTML pages."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Union

from terago.meta import VERSION, Meta, Quadrant, Ring
from terago.radar_data import RadarData, RadarEntry
from terago.technology import TechnologiesFile, Technology

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class Moved(IntEnum):
    """How a technology moved since the previous radar."""

    UNCHANGED = 0
    DEPRECATED = -1
    IMPROVED = 1
    NEW = 2


DEFAULT_TEMPLATE = r"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{ .Title }}</title>
<style>
  body { font-family: Arial, Helvetica, sans-serif; margin: 2em; color: #333; }
  .radar-date { color: #777; }
  #radar { display: flex; flex-wrap: wrap; gap: 2em; }
  #radar section { flex: 1 1 20em; }
  .changes-table { border-collapse: collapse; margin-top: 2em; }
  .changes-table th, .changes-table td { border: 1px solid #ccc; padding: 0.3em 0.6em; text-align: left; }
  footer { margin-top: 2em; font-size: 0.8em; color: #999; }
</style>
</head>
<body>
<h1>{{ .Title }}</h1>
<p class="radar-date">{{ .Date }}</p>
<div id="radar"></div>
{{ .ChangesTable }}
<footer>Generated at {{ .GeneratedAt }} (version {{ .Version }})</footer>
<script>
const radarQuadrants = {{ .QuadrantsJSON }};
const radarRings = {{ .RingsJSON }};
const radarEntries = {{ .EntriesJSON }};
{{ .DescriptionJS }}
</script>
<script>
(function () {
  const MARKS = {"-1": " \u25bc", "0": "", "1": " \u25b2", "2": " \u2605"};
  const container = document.getElementById("radar");
  radarQuadrants.forEach(function (quadrant, qIndex) {
    const section = document.createElement("section");
    const heading = document.createElement("h2");
    heading.textContent = quadrant.name;
    section.appendChild(heading);
    radarRings.forEach(function (ring, rIndex) {
      const items = radarEntries.filter(function (e) { return e.quadrant === qIndex && e.ring === rIndex; });
      if (items.length === 0) { return; }
      const title = document.createElement("h3");
      title.textContent = ring.name;
      title.style.color = ring.color;
      section.appendChild(title);
      const list = document.createElement("ul");
      items.forEach(function (entry) {
        const item = document.createElement("li");
        const label = document.createElement(entry.link ? "a" : "span");
        if (entry.link) { label.href = entry.link; }
        label.textContent = entry.label + (MARKS[entry.moved] || "");
        label.title = entry.description;
        item.appendChild(label);
        list.appendChild(item);
      });
      section.appendChild(list);
    });
    container.appendChild(section);
  });
})();
</script>
</body>
</html>
"""


def get_quadrant_index(quadrant: str, quadrants: Sequence[Quadrant]) -> int:
    """Index of the quadrant matching by name or alias, ignoring case; 0 if none."""
    wanted = quadrant.casefold()
    return next(
        (
            i
            for i, q in enumerate(quadrants)
            if q.name.casefold() == wanted or q.alias.casefold() == wanted
        ),
        0,
    )


def get_ring_index(ring: str, rings: Sequence[Ring]) -> int:
    """Index of the ring matching by name or alias, ignoring case; 0 if none."""
    wanted = ring.casefold()
    return next(
        (
            i
            for i, r in enumerate(rings)
            if r.name.casefold() == wanted or r.alias.casefold() == wanted
        ),
        0,
    )


def get_moved_value(tech: Technology, rings: Sequence[Ring]) -> Moved:
    """Classify the movement of ``tech`` since the previous radar."""
    if tech.is_new:
        return Moved.NEW
    if tech.is_moved:
        current = get_ring_index(tech.ring, rings)
        previous = get_ring_index(tech.previous_ring, rings)
        if current < previous:
            return Moved.IMPROVED
        return Moved.DEPRECATED
    return Moved.UNCHANGED


def format_date(date_str: str) -> str:
    """Turn ``YYYYMMDD`` into ``YYYY-MM-DD``; other lengths pass through unchanged."""
    if len(date_str) != 8:
        return date_str
    return f"{date_str[:4]}-{date_str[4:6]}-{date_str[6:]}"


def convert_technologies_to_entries(
    technologies: Iterable[Technology], meta: Meta, include_links: bool = False
) -> list[RadarEntry]:
    """Build the radar entries for ``technologies``."""
    return [
        RadarEntry(
            quadrant=get_quadrant_index(tech.quadrant, meta.quadrants),
            ring=get_ring_index(tech.ring, meta.rings),
            moved=int(get_moved_value(tech, meta.rings)),
            label=tech.name,
            link=f"/{tech.quadrant}/{tech.name}/" if include_links else "",
            active=False,
            description=tech.description,
        )
        for tech in technologies
    ]


_CHANGES_HEAD = """
	<div class="changes-section">
		<h3>Changes in this Radar</h3>
		<table class="changes-table">
			<thead>
				<tr>
					<th>Technology</th>
					<th>Quadrant</th>
					<th>Status</th>
					<th>Description</th>
				</tr>
			</thead>
			<tbody>"""

_CHANGES_TAIL = """
			</tbody>
		</table>
	</div>"""


def build_changes_table(technologies: Iterable[Technology], meta: Meta) -> str:
    """HTML table of the new or moved technologies; empty if there are none."""
    changed = [tech for tech in technologies if tech.is_new or tech.is_moved]
    if not changed:
        return ""

    rows = []
    for tech in changed:
        status = "NEW" if tech.is_new else f"MOVED: {tech.previous_ring} \u2192 {tech.ring}"
        rows.append(
            "\n\t\t\t\t<tr>"
            f"\n\t\t\t\t\t<td><strong>{tech.name}</strong></td>"
            f"\n\t\t\t\t\t<td>{tech.quadrant}</td>"
            f'\n\t\t\t\t\t<td class="status-{tech.ring.lower()}">{status}</td>'
            f"\n\t\t\t\t\t<td>{tech.description}</td>"
            "\n\t\t\t\t</tr>"
        )
    return _CHANGES_HEAD + "".join(rows) + _CHANGES_TAIL


# Template field name -> (RadarData attribute, inserted without escaping)
_FIELDS = {
    "Title": ("title", False),
    "Date": ("date", False),
    "Version": ("version", False),
    "GeneratedAt": ("generated_at", False),
    "Entries": ("entries", False),
    "Quadrants": ("quadrants", False),
    "Rings": ("rings", False),
    "EntriesJSON": ("entries_json", True),
    "QuadrantsJSON": ("quadrants_json", True),
    "RingsJSON": ("rings_json", True),
    "DescriptionJS": ("description_js", True),
    "ChangesTable": ("changes_table", True),
}

_HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&#34;", "'": "&#39;"}
_FIELD_REF = re.compile(r"\.([A-Za-z_][A-Za-z0-9_]*)")
_TRIM_SPACE = " \t\r\n"


@dataclass(frozen=True)
class _Action:
    body: str


@dataclass(frozen=True)
class _Field:
    name: str


@dataclass(frozen=True)
class _If:
    name: str
    then: list = field(default_factory=list)
    otherwise: list = field(default_factory=list)


def _lex(text: str) -> Iterator[str | _Action]:
    pos = 0
    trim_next = False
    while True:
        start = text.find("{{", pos)
        if start < 0:
            chunk = text[pos:]
            yield chunk.lstrip(_TRIM_SPACE) if trim_next else chunk
            return
        end = text.find("}}", start + 2)
        if end < 0:
            raise ValueError(f"template: unclosed action at offset {start}")
        chunk = text[pos:start]
        body = text[start + 2 : end]
        if trim_next:
            chunk = chunk.lstrip(_TRIM_SPACE)
        if body[:1] == "-" and body[1:2] in tuple(_TRIM_SPACE):
            chunk = chunk.rstrip(_TRIM_SPACE)
            body = body[1:]
        trim_next = len(body) >= 2 and body[-1] == "-" and body[-2] in _TRIM_SPACE
        if trim_next:
            body = body[:-1]
        yield chunk
        yield _Action(body.strip(_TRIM_SPACE))
        pos = end + 2


def _field_name(expression: str) -> str:
    match = _FIELD_REF.fullmatch(expression)
    if match is None:
        raise ValueError(f"template: unsupported action '{expression}'")
    return match.group(1)


def _parse_nodes(pieces: Iterator[str | _Action], inside_if: bool) -> tuple[list, str | None]:
    nodes: list = []
    for piece in pieces:
        if isinstance(piece, str):
            if piece:
                nodes.append(piece)
            continue
        body = piece.body
        if body.startswith("/*") and body.endswith("*/"):
            continue
        if body in ("end", "else"):
            if not inside_if:
                raise ValueError(f"template: unexpected {{{{{body}}}}}")
            return nodes, body
        keyword, _, argument = body.partition(" ")
        if keyword == "if":
            name = _field_name(argument.strip(_TRIM_SPACE))
            then, stop = _parse_nodes(pieces, True)
            otherwise: list = []
            if stop == "else":
                otherwise, stop = _parse_nodes(pieces, True)
                if stop == "else":
                    raise ValueError("template: more than one {{else}} in {{if}}")
            nodes.append(_If(name, then, otherwise))
            continue
        nodes.append(_Field(_field_name(body)))
    if inside_if:
        raise ValueError("template: unexpected end of template, missing {{end}}")
    return nodes, None


def _parse_template(template_text: str) -> list:
    nodes, _ = _parse_nodes(_lex(template_text), False)
    return nodes


def _lookup(data: RadarData, name: str) -> tuple[object, bool]:
    try:
        attribute, trusted = _FIELDS[name]
    except KeyError:
        raise ValueError(f"template: can't evaluate field {name} in radar data") from None
    return getattr(data, attribute), trusted


def _render_nodes(nodes: list, data: RadarData, out: list[str]) -> None:
    for node in nodes:
        if isinstance(node, str):
            out.append(node)
        elif isinstance(node, _If):
            value, _ = _lookup(data, node.name)
            _render_nodes(node.then if value else node.otherwise, data, out)
        else:
            value, trusted = _lookup(data, node.name)
            text = str(value)
            out.append(text if trusted else "".join(_HTML_ESCAPES.get(c, c) for c in text))


def _render(nodes: list, data: RadarData) -> str:
    out: list[str] = []
    _render_nodes(nodes, data, out)
    return "".join(out)


def render_template(template_text: str, data: RadarData) -> str:
    """Render a page template with ``data``.

    Supports ``{{ .Field }}`` and ``{{if .Field}}...{{else}}...{{end}}``.
    Text fields are HTML-escaped; the JSON, script and table fields are
    inserted as they are. Raises ValueError on a malformed template or an
    unknown field.
    """
    return _render(_parse_template(template_text), data)


def generate_radar(
    output_dir: PathLike,
    template_path: PathLike | None,
    files: Iterable[TechnologiesFile],
    meta: Meta,
    force: bool = False,
    verbose: bool = False,
    include_links: bool = False,
    add_changes: bool = False,
) -> list[Path]:
    """Write one HTML page per technologies file into ``output_dir``.

    Existing pages are kept unless ``force`` is set. Without a template path
    the built-in template is used. Returns the paths that were written.
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if template_path:
        template_text = Path(template_path).read_text(encoding="utf-8")
    else:
        template_text = DEFAULT_TEMPLATE
    nodes = _parse_template(template_text)

    written: list[Path] = []
    for technologies_file in files:
        output_file = out_dir / f"{technologies_file.date}.html"
        if not force and output_file.exists():
            if verbose:
                logger.info(
                    "Skipping %s.html (already exists, use --force to regenerate)",
                    technologies_file.date,
                )
            continue

        data = RadarData(
            title=meta.title,
            date=format_date(technologies_file.date),
            version=VERSION,
            generated_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            entries=convert_technologies_to_entries(
                technologies_file.technologies, meta, include_links
            ),
            quadrants=list(meta.quadrants),
            rings=list(meta.rings),
        )
        data.update_json()
        if add_changes:
            data.changes_table = build_changes_table(technologies_file.technologies, meta)

        output_file.write_text(_render(nodes, data), encoding="utf-8")
        written.append(output_file)
        if verbose:
            logger.info("Generated %s.html", technologies_file.date)

    return written