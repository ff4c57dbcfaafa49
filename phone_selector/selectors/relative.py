"""Relative position filters and nested anchor resolution.

Everything here works on one parsed snapshot. Nested anchors are resolved
against the same element list, never by fetching the hierarchy again.
"""

from __future__ import annotations

from typing import Callable

from loguru import logger

from phone_selector.selectors.errors import (
    AnchorNotFoundError,
    InvalidSelectorError,
    NotFoundError,
)
from phone_selector.selectors.hierarchy import ParsedElement
from phone_selector.selectors.matcher import filter_by_selector, matches_selector
from phone_selector.selectors.ranking import select_candidate
from phone_selector.selectors.schema import RelativeDirection, Selector

DEFAULT_MAX_ANCHOR_DEPTH = 16


def filter_below(elements: list[ParsedElement], anchor: ParsedElement) -> list[ParsedElement]:
    edge = anchor.bounds.bottom
    result = [element for element in elements if element.bounds.y >= edge]
    return sorted(result, key=lambda element: element.bounds.y - edge)


def filter_above(elements: list[ParsedElement], anchor: ParsedElement) -> list[ParsedElement]:
    edge = anchor.bounds.y
    result = [element for element in elements if element.bounds.bottom <= edge]
    return sorted(result, key=lambda element: edge - element.bounds.bottom)


def filter_left_of(elements: list[ParsedElement], anchor: ParsedElement) -> list[ParsedElement]:
    edge = anchor.bounds.x
    result = [element for element in elements if element.bounds.right <= edge]
    return sorted(result, key=lambda element: edge - element.bounds.right)


def filter_right_of(elements: list[ParsedElement], anchor: ParsedElement) -> list[ParsedElement]:
    edge = anchor.bounds.right
    result = [element for element in elements if element.bounds.x >= edge]
    return sorted(result, key=lambda element: element.bounds.x - edge)


def filter_child_of(elements: list[ParsedElement], anchor: ParsedElement) -> list[ParsedElement]:
    return [element for element in elements if anchor.bounds.contains(element.bounds)]


def filter_contains_child(
    elements: list[ParsedElement], anchor: ParsedElement
) -> list[ParsedElement]:
    return [element for element in elements if element.bounds.contains(anchor.bounds)]


RELATIVE_FILTERS: dict[
    RelativeDirection, Callable[[list[ParsedElement], ParsedElement], list[ParsedElement]]
] = {
    RelativeDirection.BELOW: filter_below,
    RelativeDirection.ABOVE: filter_above,
    RelativeDirection.LEFT_OF: filter_left_of,
    RelativeDirection.RIGHT_OF: filter_right_of,
    RelativeDirection.CHILD_OF: filter_child_of,
    RelativeDirection.CONTAINS_CHILD: filter_contains_child,
}


def apply_relative_filter(
    elements: list[ParsedElement], anchor: ParsedElement, direction: RelativeDirection
) -> list[ParsedElement]:
    return RELATIVE_FILTERS[direction](elements, anchor)


def _contains_all_descendants(
    parent: ParsedElement, all_elements: list[ParsedElement], descendants: list[Selector]
) -> bool:
    for descendant in descendants:
        if not any(
            parent.bounds.contains(element.bounds) and matches_selector(element, descendant)
            for element in all_elements
        ):
            return False
    return True


def filter_contains_descendants(
    elements: list[ParsedElement],
    all_elements: list[ParsedElement],
    descendants: list[Selector],
) -> list[ParsedElement]:
    """Keep elements that enclose a match for every descendant selector."""
    return [
        element
        for element in elements
        if _contains_all_descendants(element, all_elements, descendants)
    ]


def _find_anchors(
    anchor_selector: Selector,
    all_elements: list[ParsedElement],
    max_depth: int,
    depth: int,
    seen: frozenset[int],
) -> list[ParsedElement]:
    if not anchor_selector.has_relative_selector():
        return filter_by_selector(all_elements, anchor_selector)
    try:
        anchor = resolve_relative_element(
            anchor_selector, all_elements, max_depth=max_depth, _depth=depth, _seen=seen
        )
    except (NotFoundError, AnchorNotFoundError) as exc:
        logger.debug("Nested anchor unresolved: {}", exc)
        return []
    return [anchor]


def relative_candidates(
    selector: Selector,
    all_elements: list[ParsedElement],
    max_depth: int = DEFAULT_MAX_ANCHOR_DEPTH,
    _depth: int = 0,
    _seen: frozenset[int] = frozenset(),
) -> list[ParsedElement]:
    """Return the candidates satisfying every part of a relative selector.

    When several elements satisfy the anchor selector they are tried in
    snapshot order and the first anchor producing a non-empty set wins;
    results from different anchors are never merged.
    """
    if _depth > max_depth:
        raise InvalidSelectorError(f"relative selector nested deeper than {max_depth} levels")
    if id(selector) in _seen:
        raise InvalidSelectorError("relative selector references itself")
    seen = _seen | {id(selector)}

    candidates = filter_by_selector(all_elements, selector.base())

    anchor_selector, direction = selector.relative_anchor()
    if anchor_selector is not None:
        anchors = _find_anchors(anchor_selector, all_elements, max_depth, _depth + 1, seen)
        if not anchors:
            raise AnchorNotFoundError(f"anchor element not found: {anchor_selector.describe()}")
        matched: list[ParsedElement] = []
        for anchor in anchors:
            matched = apply_relative_filter(candidates, anchor, direction)
            if matched:
                break
        logger.debug(
            "{} anchors for {}, {} candidates after filter",
            len(anchors),
            direction.value,
            len(matched),
        )
        candidates = matched

    if selector.contains_descendants:
        candidates = filter_contains_descendants(
            candidates, all_elements, selector.contains_descendants
        )

    if not candidates:
        raise NotFoundError("no elements match relative criteria")
    return candidates


def resolve_relative_element(
    selector: Selector,
    all_elements: list[ParsedElement],
    max_depth: int = DEFAULT_MAX_ANCHOR_DEPTH,
    _depth: int = 0,
    _seen: frozenset[int] = frozenset(),
) -> ParsedElement:
    candidates = relative_candidates(selector, all_elements, max_depth, _depth, _seen)
    return select_candidate(candidates, selector.index)
