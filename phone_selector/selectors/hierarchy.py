"""UI hierarchy parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from xml.etree import ElementTree

from phone_selector.selectors.errors import ParseError


@dataclass(frozen=True)
class Bounds:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    def contains(self, inner: Bounds) -> bool:
        """True when ``inner`` lies fully inside these bounds (edges included)."""
        return (
            inner.x >= self.x
            and inner.y >= self.y
            and inner.right <= self.right
            and inner.bottom <= self.bottom
        )


@dataclass(eq=False)
class ParsedElement:
    text: str = ""
    resource_id: str = ""
    content_desc: str = ""
    class_name: str = ""
    bounds: Bounds = field(default_factory=Bounds)
    enabled: bool = False
    selected: bool = False
    focused: bool = False
    displayed: bool = True
    clickable: bool = False
    depth: int = 0
    children: list[ParsedElement] = field(default_factory=list, repr=False)


_BOUNDS_RE = re.compile(r"\[(-?\d+),(-?\d+)\]\[(-?\d+),(-?\d+)\]")


def parse_bounds(raw: str) -> Bounds:
    """Parse ``[x1,y1][x2,y2]``; anything else yields the zero Bounds."""
    if not raw:
        return Bounds()
    match = _BOUNDS_RE.fullmatch(raw.strip())
    if not match:
        return Bounds()
    left, top, right, bottom = map(int, match.groups())
    return Bounds(
        x=left,
        y=top,
        width=max(0, right - left),
        height=max(0, bottom - top),
    )


def _parse_node(node: ElementTree.Element, depth: int, out: list[ParsedElement]) -> ParsedElement:
    attrs = node.attrib
    element = ParsedElement(
        text=attrs.get("text", ""),
        resource_id=attrs.get("resource-id", ""),
        content_desc=attrs.get("content-desc", ""),
        class_name=attrs.get("class", ""),
        bounds=parse_bounds(attrs.get("bounds", "")),
        enabled=attrs.get("enabled") == "true",
        selected=attrs.get("selected") == "true",
        focused=attrs.get("focused") == "true",
        displayed=attrs.get("displayed") != "false",
        clickable=attrs.get("clickable") == "true",
        depth=depth,
    )
    out.append(element)
    for child in node:
        element.children.append(_parse_node(child, depth + 1, out))
    return element


def parse_page_source(xml_str: str) -> list[ParsedElement]:
    """Parse a UIAutomator hierarchy dump into a depth-first element list.

    Children of ``<hierarchy>`` sit at depth 0. Node tags are not checked:
    ``uiautomator dump`` writes ``<node>`` while the UIAutomator2 server tags
    each node with its widget class.

    Raises ParseError when the document is not XML or its root is not
    ``<hierarchy>``.
    """
    if not xml_str or not xml_str.strip():
        raise ParseError("parse XML: empty page source")
    try:
        root = ElementTree.fromstring(xml_str.strip())
    except ElementTree.ParseError as exc:
        raise ParseError(f"parse XML: {exc}") from exc
    if root.tag != "hierarchy":
        raise ParseError(f"parse XML: expected <hierarchy> root, got <{root.tag}>")

    elements: list[ParsedElement] = []
    for node in root:
        _parse_node(node, 0, elements)
    return elements


def extract_texts(elements: list[ParsedElement]) -> list[str]:
    texts: list[str] = []
    for element in elements:
        if element.text:
            texts.append(element.text)
        if element.content_desc:
            texts.append(element.content_desc)
    return texts
