"""Selector YAML/JSON loader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from phone_selector.selectors.errors import SelectorSchemaError
from phone_selector.selectors.schema import Selector, selector_from_dict


def _load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise SelectorSchemaError(f"Failed to parse YAML: {path}") from exc
    if data is None:
        raise SelectorSchemaError("Empty selector file", [str(path)])
    return data


def load_selector_file(path: str | Path) -> Selector:
    """Load a selector from a YAML document (a mapping or a bare text string)."""
    path_obj = Path(path)
    return selector_from_dict(_load_yaml(path_obj), str(path_obj))


def load_selector_from_json(text: str, source: str = "<json>") -> Selector:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SelectorSchemaError(f"Invalid JSON: {source}") from exc
    return selector_from_dict(data, source)
