"""UIAutomator2 server client."""

from phone_selector.uiautomator2.client import W3C_ELEMENT_KEY, Element, UIAutomator2Client

__all__ = [
    "UIAutomator2Client",
    "Element",
    "W3C_ELEMENT_KEY",
]
