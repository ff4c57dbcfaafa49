"""Matching of parsed elements against the non-relative parts of a selector."""

from __future__ import annotations

from phone_selector.selectors.hierarchy import ParsedElement
from phone_selector.selectors.schema import Selector

DEFAULT_SIZE_TOLERANCE = 5


def within_tolerance(actual: int, expected: int, tolerance: int) -> bool:
    return abs(actual - expected) <= tolerance


def matches_selector(element: ParsedElement, selector: Selector) -> bool:
    """Check text, id, size and state predicates; unset fields always pass."""
    if selector.text:
        needle = selector.text.lower()
        if needle not in element.text.lower() and needle not in element.content_desc.lower():
            return False

    if selector.id and selector.id not in element.resource_id:
        return False

    if selector.has_size():
        tolerance = selector.tolerance or DEFAULT_SIZE_TOLERANCE
        if selector.width > 0 and not within_tolerance(
            element.bounds.width, selector.width, tolerance
        ):
            return False
        if selector.height > 0 and not within_tolerance(
            element.bounds.height, selector.height, tolerance
        ):
            return False

    if selector.enabled is not None and element.enabled != selector.enabled:
        return False
    if selector.selected is not None and element.selected != selector.selected:
        return False
    if selector.focused is not None and element.focused != selector.focused:
        return False
    # UIAutomator reports checkboxes through the selected attribute.
    if selector.checked is not None and element.selected != selector.checked:
        return False

    return True


def filter_by_selector(elements: list[ParsedElement], selector: Selector) -> list[ParsedElement]:
    return [element for element in elements if matches_selector(element, selector)]
