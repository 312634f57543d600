"""Reading the radar metadata and the dated technology files."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

import yaml

from terago.meta import Meta, default_meta, meta_from_mapping
from terago.technology import TechnologiesFile, Technology, ValidationError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_DATE_FILE = re.compile(r"^[0-9]{8}\.yaml$")


def read_meta(file_path: PathLike | None) -> Meta:
    """Read radar metadata, falling back to the defaults on any problem."""
    if not file_path:
        logger.info("Using default meta: no meta file specified")
        return default_meta()

    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        logger.warning("Using default meta: failed to read meta file '%s': %s", path, err)
        return default_meta()

    try:
        return meta_from_mapping(yaml.safe_load(text))
    except (yaml.YAMLError, ValueError) as err:
        logger.warning("Using default meta: failed to parse meta file '%s': %s", path, err)
        return default_meta()


def _technologies_file_from_document(document: Any) -> TechnologiesFile:
    if document is None:
        return TechnologiesFile()
    if not isinstance(document, Mapping):
        raise ValueError("technologies document must be a mapping")
    date = document.get("date")
    if isinstance(date, (Mapping, list)):
        raise ValueError("field 'date' must be a scalar value")
    entries = document.get("technologies")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise ValueError("field 'technologies' must be a list")
    return TechnologiesFile(
        date="" if date is None else str(date),
        technologies=[Technology.from_mapping(entry) for entry in entries],
    )


def read_technologies_file(file_path: PathLike, meta: Meta) -> TechnologiesFile:
    """Read and validate one technologies file.

    Raises OSError when the file cannot be read, ValueError when it is not a
    valid technologies document and ValidationError when a ring or quadrant
    is unknown to ``meta``.
    """
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise OSError(f"error reading file: {err}") from err

    try:
        technologies_file = _technologies_file_from_document(yaml.safe_load(text))
    except (yaml.YAMLError, ValueError) as err:
        raise ValueError(f"error parsing YAML: {err}") from err

    try:
        technologies_file.validate_rings_and_quadrants(meta)
    except ValidationError as err:
        raise ValidationError(f"validation error in file {path}: {err}") from err

    return technologies_file


def mark_changes(current: list[Technology], previous: list[Technology]) -> None:
    """Flag technologies in ``current`` as new or moved relative to ``previous``."""
    previous_by_name = {tech.name: tech for tech in previous}
    for tech in current:
        before = previous_by_name.get(tech.name)
        if before is None:
            tech.is_new = True
            continue
        if before.ring != tech.ring:
            tech.is_moved = True
            tech.previous_ring = before.ring
        tech.is_new = False


def read_technologies_files(input_dir: PathLike, meta: Meta) -> list[TechnologiesFile]:
    """Read every ``YYYYMMDD.yaml`` file of ``input_dir`` in date order.

    Each file is dated by its name and compared with the one before it;
    everything in the first file counts as new.
    """
    directory = Path(input_dir)
    paths = sorted(
        (path for path in directory.glob("*.yaml") if _DATE_FILE.match(path.name)),
        key=lambda path: path.name,
    )

    result: list[TechnologiesFile] = []
    previous: list[Technology] | None = None
    for path in paths:
        try:
            technologies_file = read_technologies_file(path, meta)
        except (OSError, ValueError) as err:
            raise type(err)(f"error processing file {path}: {err}") from err

        technologies_file.date = path.name[: -len(".yaml")]

        if previous is not None:
            mark_changes(technologies_file.technologies, previous)
        else:
            for tech in technologies_file.technologies:
                tech.is_new = True

        previous = technologies_file.technologies
        result.append(technologies_file)

    return result