"""
phone_selector - selector resolution for mobile UI automation.

Resolves declarative element selectors (text, id, size, state and relative
position) against the live UI hierarchy of a device under test.
"""

from loguru import logger

from phone_selector.selectors import (
    AnchorNotFoundError,
    BackendError,
    DeadlineExceededError,
    ElementInfo,
    ElementResolver,
    InvalidSelectorError,
    NotFoundError,
    ParseError,
    ResolveError,
    Selector,
    SelectorSchemaError,
    load_selector_file,
    resolve_in_snapshot,
    selector_from_dict,
)
from phone_selector.uiautomator2 import UIAutomator2Client
from phone_selector.adb import AdbSourceClient

# Silent unless the application opts in with logger.enable("phone_selector").
logger.disable("phone_selector")

__version__ = "0.1.0"
__all__ = [
    "ElementResolver",
    "ElementInfo",
    "Selector",
    "selector_from_dict",
    "load_selector_file",
    "resolve_in_snapshot",
    "UIAutomator2Client",
    "AdbSourceClient",
    "ResolveError",
    "ParseError",
    "NotFoundError",
    "AnchorNotFoundError",
    "BackendError",
    "InvalidSelectorError",
    "DeadlineExceededError",
    "SelectorSchemaError",
]
