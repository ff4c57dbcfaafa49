"""Translation of selectors into native UiAutomator locator queries."""

from __future__ import annotations

from phone_selector.selectors.errors import InvalidSelectorError
from phone_selector.selectors.schema import Selector
from phone_selector.selectors.types import LocatorStrategy

STRATEGY_UIAUTOMATOR = "-android uiautomator"
STRATEGY_CLASS_NAME = "class name"

_REGEX_META = set(".*+?^$[](){}|")

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def looks_like_regex(text: str) -> bool:
    """True when text holds a regex metacharacter not preceded by a backslash."""
    for position, char in enumerate(text):
        if char not in _REGEX_META:
            continue
        if position > 0 and text[position - 1] == "\\":
            continue
        return True
    return False


def escape_uiautomator(value: str) -> str:
    """Escape a literal for use inside a quoted UiSelector regex argument."""
    result: list[str] = []
    for char in value:
        if char in _ESCAPES:
            result.append(_ESCAPES[char])
        elif char in _REGEX_META:
            result.append("\\" + char)
        else:
            result.append(char)
    return "".join(result)


def escape_uiautomator_string(value: str) -> str:
    return value.replace('"', '\\"')


def text_to_regex_pattern(text: str) -> str:
    if looks_like_regex(text):
        return "(?is)" + escape_uiautomator_string(text)
    return "(?is).*" + escape_uiautomator(text) + ".*"


def build_state_filters(selector: Selector) -> str:
    filters = []
    for name in ("enabled", "selected", "checked", "focused"):
        value = getattr(selector, name)
        if value is not None:
            filters.append(f".{name}({str(value).lower()})")
    return "".join(filters)


def build_locator_strategies(selector: Selector) -> list[LocatorStrategy]:
    """Build the native queries for a selector, in the order they are tried.

    Text yields both a text and a description query, since some UI
    frameworks only expose labels through content-desc.
    """
    strategies: list[LocatorStrategy] = []
    state_filters = build_state_filters(selector)

    if selector.id:
        strategies.append(
            LocatorStrategy(
                STRATEGY_UIAUTOMATOR,
                f'new UiSelector().resourceIdMatches(".*{escape_uiautomator(selector.id)}.*")'
                + state_filters,
            )
        )

    if selector.text:
        pattern = text_to_regex_pattern(selector.text)
        strategies.append(
            LocatorStrategy(
                STRATEGY_UIAUTOMATOR,
                f'new UiSelector().textMatches("{pattern}")' + state_filters,
            )
        )
        strategies.append(
            LocatorStrategy(
                STRATEGY_UIAUTOMATOR,
                f'new UiSelector().descriptionMatches("{pattern}")' + state_filters,
            )
        )

    if selector.css:
        strategies.append(LocatorStrategy(STRATEGY_CLASS_NAME, selector.css))

    if not strategies:
        raise InvalidSelectorError(f"no selector specified: {selector.describe()}")
    return strategies
