"""Selector model, validation and normalization."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from phone_selector.selectors.errors import SelectorSchemaError


class RelativeDirection(str, Enum):
    BELOW = "below"
    ABOVE = "above"
    LEFT_OF = "leftOf"
    RIGHT_OF = "rightOf"
    CHILD_OF = "childOf"
    CONTAINS_CHILD = "containsChild"


# Attribute name on Selector for each direction, in precedence order.
RELATIVE_FIELDS: list[tuple[str, RelativeDirection]] = [
    ("below", RelativeDirection.BELOW),
    ("above", RelativeDirection.ABOVE),
    ("left_of", RelativeDirection.LEFT_OF),
    ("right_of", RelativeDirection.RIGHT_OF),
    ("child_of", RelativeDirection.CHILD_OF),
    ("contains_child", RelativeDirection.CONTAINS_CHILD),
]

_STATE_FIELDS = ("enabled", "selected", "focused", "checked")


@dataclass
class Selector:
    """Declarative element query.

    Only one of the directional anchors is expected per selector;
    ``contains_descendants`` composes with any of them.
    """

    text: str = ""
    id: str = ""
    css: str = ""
    width: int = 0
    height: int = 0
    tolerance: int = 0
    enabled: bool | None = None
    selected: bool | None = None
    focused: bool | None = None
    checked: bool | None = None
    index: str = ""
    below: Selector | None = None
    above: Selector | None = None
    left_of: Selector | None = None
    right_of: Selector | None = None
    child_of: Selector | None = None
    contains_child: Selector | None = None
    contains_descendants: list[Selector] = field(default_factory=list)

    def relative_anchor(self) -> tuple[Selector | None, RelativeDirection | None]:
        for name, direction in RELATIVE_FIELDS:
            anchor = getattr(self, name)
            if anchor is not None:
                return anchor, direction
        return None, None

    def has_relative_selector(self) -> bool:
        anchor, _ = self.relative_anchor()
        return anchor is not None or bool(self.contains_descendants)

    def has_size(self) -> bool:
        return self.width > 0 or self.height > 0

    def base(self) -> Selector:
        """Copy holding only the fields the matcher evaluates."""
        return replace(
            self,
            css="",
            index="",
            below=None,
            above=None,
            left_of=None,
            right_of=None,
            child_of=None,
            contains_child=None,
            contains_descendants=[],
        )

    def is_empty(self) -> bool:
        if self.text or self.id or self.css or self.has_size():
            return False
        if any(getattr(self, name) is not None for name in _STATE_FIELDS):
            return False
        return not self.has_relative_selector()

    def describe(self, _seen: frozenset[int] = frozenset()) -> str:
        if id(self) in _seen:
            return "<cycle>"
        seen = _seen | {id(self)}
        parts: list[str] = []
        for name in ("text", "id", "css"):
            value = getattr(self, name)
            if value:
                parts.append(f'{name}="{value}"')
        if self.width > 0:
            parts.append(f"width={self.width}")
        if self.height > 0:
            parts.append(f"height={self.height}")
        if self.has_size() and self.tolerance > 0:
            parts.append(f"tolerance={self.tolerance}")
        for name in _STATE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                parts.append(f"{name}={str(value).lower()}")
        if self.index:
            parts.append(f"index={self.index}")
        for name, direction in RELATIVE_FIELDS:
            anchor = getattr(self, name)
            if anchor is not None:
                parts.append(f"{direction.value}=({anchor.describe(seen)})")
        if self.contains_descendants:
            inner = ", ".join(f"({d.describe(seen)})" for d in self.contains_descendants)
            parts.append(f"containsDescendants=[{inner}]")
        return ", ".join(parts) or "<empty selector>"


# Document keys and the Selector attributes they populate.
_STRING_KEYS = {"text": "text", "id": "id", "css": "css"}
_INT_KEYS = {"width": "width", "height": "height", "tolerance": "tolerance"}
_BOOL_KEYS = {name: name for name in _STATE_FIELDS}
_RELATIVE_KEYS = {direction.value: name for name, direction in RELATIVE_FIELDS}
_KNOWN_KEYS = (
    set(_STRING_KEYS)
    | set(_INT_KEYS)
    | set(_BOOL_KEYS)
    | set(_RELATIVE_KEYS)
    | {"index", "containsDescendants"}
)


def _build(data: Any, path: str, errors: list[str]) -> Selector | None:
    if isinstance(data, str):
        return Selector(text=data)
    if not isinstance(data, dict):
        errors.append(f"{path}: selector must be a mapping or a string")
        return None

    values: dict[str, Any] = {}
    for key in data:
        if key not in _KNOWN_KEYS:
            errors.append(f"{path}: unknown field '{key}'")

    for key, attr in _STRING_KEYS.items():
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            errors.append(f"{path}.{key}: must be a string")
            continue
        values[attr] = str(value)

    for key, attr in _INT_KEYS.items():
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            errors.append(f"{path}.{key}: must be a non-negative integer")
            continue
        values[attr] = value

    for key, attr in _BOOL_KEYS.items():
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, bool):
            errors.append(f"{path}.{key}: must be true or false")
            continue
        values[attr] = value

    index = data.get("index")
    if index is not None:
        if isinstance(index, bool) or not isinstance(index, (int, str)):
            errors.append(f"{path}.index: must be an integer or a string")
        else:
            values["index"] = str(index)

    for key, attr in _RELATIVE_KEYS.items():
        if data.get(key) is None:
            continue
        anchor = _build(data[key], f"{path}.{key}", errors)
        if anchor is not None:
            values[attr] = anchor

    descendants = data.get("containsDescendants")
    if descendants is not None:
        if not isinstance(descendants, list):
            errors.append(f"{path}.containsDescendants: must be a list")
        else:
            built = []
            for position, item in enumerate(descendants):
                child = _build(item, f"{path}.containsDescendants[{position}]", errors)
                if child is not None:
                    built.append(child)
            values["contains_descendants"] = built

    return Selector(**values)


def selector_from_dict(data: Any, source: str = "<selector>") -> Selector:
    errors: list[str] = []
    selector = _build(data, "selector", errors)
    if errors or selector is None:
        raise SelectorSchemaError(f"Selector invalid: {source}", errors)
    return selector

