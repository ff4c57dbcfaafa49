"""Candidate ordering and final element selection."""

from __future__ import annotations

from phone_selector.selectors.hierarchy import ParsedElement


def sort_clickable_first(elements: list[ParsedElement]) -> list[ParsedElement]:
    """Stable partition: clickable elements first, input order kept in each group."""
    clickable = [element for element in elements if element.clickable]
    others = [element for element in elements if not element.clickable]
    return clickable + others


def deepest_matching_element(elements: list[ParsedElement]) -> ParsedElement | None:
    """Return the most deeply nested element; the first one wins a tie."""
    if not elements:
        return None
    deepest = elements[0]
    for element in elements[1:]:
        if element.depth > deepest.depth:
            deepest = element
    return deepest


def _parse_index(index: str) -> int | None:
    try:
        return int(index.strip())
    except ValueError:
        return None


def select_candidate(candidates: list[ParsedElement], index: str = "") -> ParsedElement | None:
    """Rank candidates and pick one.

    An explicit index selects into the clickable-first ordering, negative
    values counting from the end; an out-of-range or unparseable index falls
    back to the first candidate. Without an index the deepest candidate wins,
    so a leaf widget is preferred over the container that also matches.
    """
    if not candidates:
        return None
    ranked = sort_clickable_first(candidates)
    if not index:
        return deepest_matching_element(ranked)

    position = _parse_index(index)
    if position is None:
        return ranked[0]
    if position < 0:
        position += len(ranked)
    if 0 <= position < len(ranked):
        return ranked[position]
    return ranked[0]
