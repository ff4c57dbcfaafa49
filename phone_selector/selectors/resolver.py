"""Selector resolution against a live device."""

from __future__ import annotations

import time
from functools import partial
from typing import Any, Callable

from loguru import logger

from phone_selector.config.timing import FindTimingConfig, get_timing_config
from phone_selector.selectors.backend import AutomationClient
from phone_selector.selectors.errors import (
    BackendError,
    DeadlineExceededError,
    InvalidSelectorError,
    NotFoundError,
    ResolveError,
)
from phone_selector.selectors.hierarchy import Bounds, ParsedElement, parse_page_source
from phone_selector.selectors.locators import build_locator_strategies
from phone_selector.selectors.matcher import filter_by_selector
from phone_selector.selectors.ranking import select_candidate
from phone_selector.selectors.relative import (
    DEFAULT_MAX_ANCHOR_DEPTH,
    resolve_relative_element,
)
from phone_selector.selectors.schema import Selector
from phone_selector.selectors.types import ElementInfo, LocatorStrategy, SelectorShape


def classify_selector(selector: Selector) -> SelectorShape:
    if selector.has_relative_selector():
        return SelectorShape.RELATIVE
    if selector.has_size():
        return SelectorShape.SIZE
    return SelectorShape.LOCATOR


def match_in_snapshot(selector: Selector, elements: list[ParsedElement]) -> ParsedElement:
    candidates = filter_by_selector(elements, selector)
    selected = select_candidate(candidates, selector.index)
    if selected is None:
        raise NotFoundError("no elements match selector")
    return selected


def resolve_in_snapshot(
    selector: Selector,
    elements: list[ParsedElement],
    max_anchor_depth: int = DEFAULT_MAX_ANCHOR_DEPTH,
) -> ElementInfo:
    """Resolve a selector against one parsed snapshot without any I/O."""
    if selector.has_relative_selector():
        element = resolve_relative_element(selector, elements, max_depth=max_anchor_depth)
    else:
        element = match_in_snapshot(selector, elements)
    return ElementInfo.from_parsed(element)


def element_info_from_handle(handle: Any) -> ElementInfo:
    """Read text, bounds and state from a native handle.

    Accessor failures leave the field at its default.
    """
    info = ElementInfo(handle=handle)
    try:
        info.text = handle.text()
    except Exception as exc:
        logger.debug("Element text unavailable: {}", exc)
    try:
        rect = handle.rect()
        info.bounds = Bounds(
            x=int(rect.get("x", 0)),
            y=int(rect.get("y", 0)),
            width=int(rect.get("width", 0)),
            height=int(rect.get("height", 0)),
        )
    except Exception as exc:
        logger.debug("Element rect unavailable: {}", exc)
    try:
        info.visible = handle.is_displayed()
    except Exception as exc:
        logger.debug("Element displayed state unavailable: {}", exc)
    try:
        info.enabled = handle.is_enabled()
    except Exception as exc:
        logger.debug("Element enabled state unavailable: {}", exc)
    return info


class ElementResolver:
    """
    Resolve selectors to elements on one device.

    The shape of a selector picks one of three strategies: relative
    selectors and size selectors are matched against a parsed hierarchy
    snapshot; everything else goes through native locator queries. Each
    strategy is retried without delay until it succeeds or the deadline
    passes, the round trip to the automation server acting as the rate
    limit. The deadline is only checked between attempts.

    Example:
        >>> resolver = ElementResolver(client)
        >>> info = resolver.resolve(Selector(text="Login", below=Selector(text="Header")))
        >>> x, y = info.bounds.center
    """

    def __init__(
        self,
        client: AutomationClient,
        timing: FindTimingConfig | None = None,
        parser: Callable[[str], list[ParsedElement]] = parse_page_source,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.timing = timing or get_timing_config().find
        self.parser = parser
        self.clock = clock
        # 0 means use the configured tier
        self.find_timeout_ms = 0
        self.optional_find_timeout_ms = 0

    def set_find_timeout(self, timeout_ms: int) -> None:
        self.find_timeout_ms = timeout_ms

    def set_optional_find_timeout(self, timeout_ms: int) -> None:
        self.optional_find_timeout_ms = timeout_ms

    def timeout_for(self, optional: bool = False, timeout_ms: int = 0) -> int:
        if timeout_ms > 0:
            return timeout_ms
        if optional:
            return self.optional_find_timeout_ms or self.timing.optional_find_timeout_ms
        return self.find_timeout_ms or self.timing.default_find_timeout_ms

    def resolve(self, selector: Selector, optional: bool = False, timeout_ms: int = 0) -> ElementInfo:
        """
        Find the element a selector describes, polling until the deadline.

        Args:
            selector: The element query.
            optional: Use the shorter optional-lookup timeout.
            timeout_ms: Explicit timeout; overrides both tiers when > 0.

        Returns:
            ElementInfo; ``handle`` is set only for native locator matches.

        Raises:
            InvalidSelectorError: The selector has no predicate at all.
            ResolveError: The element was not found before the deadline.
        """
        timeout = self.timeout_for(optional, timeout_ms)
        return self._resolve(selector, timeout, quick=False)

    def find_quick(self, selector: Selector, timeout_ms: int = 0) -> ElementInfo:
        """
        Look an element up with the quick timeout.

        Native locator queries are tried once; callers such as
        assertNotVisible or waitUntil run their own polling around this.
        Snapshot-based shapes still poll within the quick timeout.
        """
        timeout = timeout_ms if timeout_ms > 0 else self.timing.quick_find_timeout_ms
        return self._resolve(selector, timeout, quick=True)

    def _resolve(self, selector: Selector, timeout_ms: int, quick: bool) -> ElementInfo:
        if selector.is_empty():
            raise InvalidSelectorError("no selector specified")

        shape = classify_selector(selector)
        logger.debug("Resolving {} as {} within {}ms", selector.describe(), shape.value, timeout_ms)

        single_attempt = False
        if shape is SelectorShape.RELATIVE:
            attempt = partial(self._attempt_relative, selector)
        elif shape is SelectorShape.SIZE:
            attempt = partial(self._attempt_snapshot, selector)
        else:
            strategies = build_locator_strategies(selector)
            single_attempt = quick
            attempt = partial(self._attempt_locator, selector, strategies, fallback=not quick)

        return self._poll(attempt, selector, timeout_ms, single_attempt)

    def _poll(
        self,
        attempt: Callable[[], ElementInfo | None],
        selector: Selector,
        timeout_ms: int,
        single_attempt: bool = False,
    ) -> ElementInfo:
        """Run ``attempt`` until it returns an element or the deadline passes.

        An attempt returning None is a miss with no error of its own; if no
        attempt ever raised, the caller gets DeadlineExceededError.
        """
        deadline = self.clock() + timeout_ms / 1000.0
        last_error: ResolveError | None = None
        attempts = 0

        while True:
            attempts += 1
            try:
                info = attempt()
            except ResolveError as exc:
                if not exc.retryable:
                    raise
                last_error = exc
                info = None
                logger.debug("Attempt {} failed: {}", attempts, exc)

            if info is not None:
                logger.info(
                    "Resolved {} after {} attempt(s) at {}",
                    selector.describe(),
                    attempts,
                    info.bounds,
                )
                return info

            if single_attempt or self.clock() >= deadline:
                break

        logger.warning(
            "Gave up on {} after {} attempt(s) in {}ms", selector.describe(), attempts, timeout_ms
        )
        if last_error is None:
            raise DeadlineExceededError(
                f"Element not found: {selector.describe()} (timeout {timeout_ms}ms)"
            )
        raise last_error.with_context(selector.describe(), timeout_ms) from last_error

    def _snapshot(self) -> list[ParsedElement]:
        try:
            raw = self.client.source()
        except ResolveError:
            raise
        except Exception as exc:
            raise BackendError(f"failed to get page source: {exc}") from exc
        return self.parser(raw)

    def _attempt_relative(self, selector: Selector) -> ElementInfo:
        element = resolve_relative_element(
            selector, self._snapshot(), max_depth=self.timing.max_anchor_depth
        )
        return ElementInfo.from_parsed(element)

    def _attempt_snapshot(self, selector: Selector) -> ElementInfo:
        return ElementInfo.from_parsed(match_in_snapshot(selector, self._snapshot()))

    def _attempt_locator(
        self, selector: Selector, strategies: list[LocatorStrategy], fallback: bool
    ) -> ElementInfo:
        try:
            return self._try_strategies(strategies)
        except NotFoundError:
            if not (fallback and selector.text):
                raise
            # Hint text and similar attributes are invisible to UiSelector
            # queries but present in the dump.
            try:
                return self._attempt_snapshot(selector)
            except ResolveError as exc:
                logger.debug("Page source fallback failed: {}", exc)
            raise

    def _try_strategies(self, strategies: list[LocatorStrategy]) -> ElementInfo:
        last_exc: Exception | None = None
        for strategy in strategies:
            try:
                handle = self.client.find_element(strategy.strategy, strategy.value)
            except Exception as exc:
                logger.debug("{} {!r} failed: {}", strategy.strategy, strategy.value, exc)
                last_exc = exc
                continue
            return element_info_from_handle(handle)

        internal = not isinstance(last_exc, ResolveError) or last_exc.internal
        raise NotFoundError(f"element not found: {last_exc}", internal=internal) from last_exc
