"""Result and query types shared by the resolver and its backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from phone_selector.selectors.hierarchy import Bounds, ParsedElement


class SelectorShape(Enum):
    """How a selector is resolved."""

    RELATIVE = "relative"  # snapshot + relative filters
    SIZE = "size"  # snapshot + matcher
    LOCATOR = "locator"  # native locator queries


@dataclass(frozen=True)
class LocatorStrategy:
    strategy: str
    value: str


@dataclass
class ElementInfo:
    """A resolved element.

    ``handle`` is set only when a native locator query found the element;
    snapshot-based resolution leaves it ``None`` and callers act on
    ``bounds``.
    """

    text: str = ""
    bounds: Bounds = field(default_factory=Bounds)
    enabled: bool = False
    visible: bool = False
    handle: Any | None = None

    @classmethod
    def from_parsed(cls, element: ParsedElement) -> "ElementInfo":
        return cls(
            text=element.text,
            bounds=element.bounds,
            enabled=element.enabled,
            visible=element.displayed,
        )
