"""
Node Record Loader (JSON)
Turns file and inline JSON payloads into a flat list of node records.

A payload is a JSON array of objects. The keys of the package map dumps this
engine was built for (``Name``, ``dep``, ``introduced_in``) are accepted, as
are the lower-case aliases ``name``, ``deps``/``dependencies`` and ``group``.
Every other key is descriptive data and is ignored.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from forcelayout.errors import MalformedInputError

logger = logging.getLogger(__name__)

NAME_KEYS = ("Name", "name")
DEPENDENCY_KEYS = ("dep", "deps", "dependencies")
GROUP_KEYS = ("introduced_in", "group")


def _first_present(data: dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


@dataclass(frozen=True)
class NodeRecord:
    name: str
    dependencies: tuple[str, ...] = field(default_factory=tuple)
    group: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NodeRecord:
        if not isinstance(data, dict):
            raise MalformedInputError(
                f"Node record must be a JSON object, got {type(data).__name__}."
            )

        name = _first_present(data, NAME_KEYS)
        if not isinstance(name, str) or name == "":
            raise MalformedInputError(f"Node record {data!r} has no name.")

        deps = _first_present(data, DEPENDENCY_KEYS)
        if deps is None:
            deps = []
        if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
            raise MalformedInputError(
                f"Dependencies of '{name}' must be a list of names.", node=name
            )

        group = _first_present(data, GROUP_KEYS)
        if group is not None:
            group = str(group)

        return cls(name=name, dependencies=tuple(deps), group=group)


def parse_records(text: str) -> list[NodeRecord]:
    """
    Parse a JSON array of node records.

    Raises:
        MalformedInputError: If the text is not valid JSON or not an array of records.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Node records are not valid JSON: {e}") from e

    if not isinstance(payload, list):
        raise MalformedInputError(
            f"Node records must be a JSON array, got {type(payload).__name__}."
        )
    return [NodeRecord.from_dict(item) for item in payload]


def load_records(filepath: str) -> list[NodeRecord]:
    logger.info(f"Loading node records from: {filepath}")
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"Node records in {filepath} are not valid UTF-8: {e}") from e
    records = parse_records(text)
    logger.debug(f"Read {len(records)} records from {os.path.basename(filepath)}")
    return records


def collect_records(filepath: Optional[str] = None, inline: Optional[str] = None) -> list[NodeRecord]:
    """
    Merge the file payload and the inline payload into one list.

    File records come first. Either source may be omitted; with neither the
    result is empty.
    """
    records: list[NodeRecord] = []
    if filepath:
        records.extend(load_records(filepath))
    if inline:
        inline_records = parse_records(inline)
        logger.debug(f"Read {len(inline_records)} inline records")
        records.extend(inline_records)
    return records
