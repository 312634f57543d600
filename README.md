# terago

`terago` builds technology radar pages. You keep one YAML file for each
snapshot and name it for its date (`YYYYMMDD.yaml`). `terago` turns every
snapshot into a standalone HTML page. It also works out which technologies are
new since the snapshot before, and which have moved to another ring.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Input

An input directory holds the dated snapshot files. Only files whose names match
`YYYYMMDD.yaml` are read, and they are read in date order. The date of a
snapshot comes from its file name.

```yaml
# radar/20231201.yaml
technologies:
  - name: "Go"
    ring: "Adopt"
    quadrant: "Languages"
    description: "Efficient programming language"
  - name: "React"
    ring: "Trial"
    quadrant: "Frameworks"
    description: "Library for creating user interfaces"
```

Every technology in the first snapshot counts as new. In each later snapshot a
technology is new if the previous snapshot did not have it. A technology has
moved if its ring differs from its ring in the previous snapshot. Technologies
are matched by name.

An optional meta file gives the radar's title, description, quadrants and
rings:

```yaml
title: "Test Technology Radar"
description: "Example technology radar for demonstration"
quadrants:
  - name: "Languages"
    alias: "languages"
  - name: "Frameworks"
    alias: "frameworks"
  - name: "Infrastructure"
    alias: "infrastructure"
  - name: "Architecture"
    alias: "architecture"
rings:
  - name: "Adopt"
    alias: "adopt"
  - name: "Trial"
    alias: "trial"
  - name: "Assess"
    alias: "assess"
  - name: "Hold"
    alias: "hold"
```

If no meta file is given, or it cannot be read or parsed, the default meta is
used and a warning is logged. The default has the title "My Radar", the
description "Technology Radar", the quadrants Languages, Frameworks, Platforms
and Techniques, and the rings Adopt, Trial, Assess and Hold. A meta file that
leaves out the title, the description, the quadrants or the rings gets the
default for that part.

Every technology must name a ring and a quadrant that the meta defines, by name
or by alias, with the exact case. If one does not, reading stops with an error.

## Usage

```
terago --input radar --output site --meta meta.yaml
```

This writes one HTML page per snapshot into the output directory, for example
`site/20231201.html`. The output directory is created if it is missing. A page
that already exists is left as it is unless you pass `--force`.

Options (each may also be written with a single dash, e.g. `-input`):

| Option | Meaning |
| --- | --- |
| `--input DIR` | directory with `YYYYMMDD.yaml` files (required) |
| `--output DIR` | directory for HTML output (default `output`) |
| `--template FILE` | page template to use instead of the built-in one |
| `--export-template FILE` | write the built-in template to `FILE` and exit |
| `--meta FILE` | meta file (default `meta.yaml`) |
| `--force` | regenerate pages that already exist |
| `--verbose` | log each file as it is processed |
| `--include-links` | give each entry a link of the form `/<quadrant>/<name>/` |
| `--add-changes` | add a table listing new and moved technologies |
| `--version` | print the version and exit |

The command exits with status 1 if `--input` is missing, or if reading the
snapshots or writing the pages fails.

## Templates

A template is an HTML file with `{{ .Field }}` placeholders and
`{{if .Field}}...{{else}}...{{end}}` blocks. `{{- ` and ` -}}` trim the
whitespace next to an action, and `{{/* ... */}}` is a comment. The fields are:

| Field | Content |
| --- | --- |
| `Title` | radar title from the meta |
| `Date` | snapshot date as `YYYY-MM-DD` |
| `Version` | version of `terago` |
| `GeneratedAt` | time of generation, `YYYY-MM-DD HH:MM:SS` |
| `EntriesJSON` | JSON list of entries: `quadrant`, `ring`, `moved`, `label`, `link`, `active`, `description` |
| `QuadrantsJSON` | JSON list of quadrants: `name`, `id` (`q1`, `q2`, ...) |
| `RingsJSON` | JSON list of rings: upper-cased `name`, `color`, `id` (the alias) |
| `DescriptionJS` | extra script text (empty in pages written by `terago`) |
| `ChangesTable` | HTML table of changes, filled in with `--add-changes` |

Text fields are HTML-escaped. The JSON, script and table fields are inserted as
they are. An entry's `moved` value is `2` for new, `1` for moved to an inner
ring, `-1` for moved to an outer ring (or moved within the same ring), and `0`
for unchanged. `--export-template` gives a starting point to edit.

## Using it from Python

```python
from terago.reading import read_meta, read_technologies_files
from terago.generate import generate_radar

meta = read_meta("meta.yaml")
files = read_technologies_files("radar", meta)
written = generate_radar("site", "", files, meta, False, False, True, True)
```

`generate_radar` returns the paths of the pages it wrote. The other modules are
`terago.meta` (`Meta`, `Quadrant`, `Ring`, `new_meta`, `default_meta`),
`terago.technology` (`Technology`, `TechnologiesFile`, `ValidationError`),
`terago.radar_data` (`RadarEntry`, `RadarData`) and `terago.generate`
(`render_template`, `build_changes_table`, `format_date` and the index helpers).

## What it does not do

The built-in template shows each quadrant as a list of its entries, grouped by
ring and coloured by ring. It does not draw the radar as a circular chart, and
it has no pop-up for descriptions; a description shows as the tooltip of its
entry. For a graphical radar, supply your own template with `--template`.