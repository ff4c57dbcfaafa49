"""Selector resolution exports."""

from phone_selector.selectors.errors import (
    AnchorNotFoundError,
    BackendError,
    DeadlineExceededError,
    InvalidSelectorError,
    NotFoundError,
    ParseError,
    ResolveError,
    ResolveErrorCode,
    SelectorSchemaError,
)
from phone_selector.selectors.hierarchy import Bounds, ParsedElement, parse_bounds, parse_page_source
from phone_selector.selectors.loader import load_selector_file, load_selector_from_json
from phone_selector.selectors.recording import (
    FileSourceClient,
    PlaybackSourceClient,
    RecordingSourceClient,
)
from phone_selector.selectors.resolver import (
    ElementResolver,
    classify_selector,
    resolve_in_snapshot,
)
from phone_selector.selectors.schema import RelativeDirection, Selector, selector_from_dict
from phone_selector.selectors.types import ElementInfo, LocatorStrategy, SelectorShape

__all__ = [
    "Selector",
    "RelativeDirection",
    "selector_from_dict",
    "load_selector_file",
    "load_selector_from_json",
    "Bounds",
    "ParsedElement",
    "parse_bounds",
    "parse_page_source",
    "ElementInfo",
    "LocatorStrategy",
    "SelectorShape",
    "ElementResolver",
    "classify_selector",
    "resolve_in_snapshot",
    "RecordingSourceClient",
    "PlaybackSourceClient",
    "FileSourceClient",
    "ResolveError",
    "ResolveErrorCode",
    "ParseError",
    "NotFoundError",
    "AnchorNotFoundError",
    "BackendError",
    "InvalidSelectorError",
    "DeadlineExceededError",
    "SelectorSchemaError",
]
