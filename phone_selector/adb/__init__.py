"""ADB utilities for reading the Android UI hierarchy."""

from phone_selector.adb.device import AdbSourceClient, get_ui_tree

__all__ = [
    "AdbSourceClient",
    "get_ui_tree",
]
