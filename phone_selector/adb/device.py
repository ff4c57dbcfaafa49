"""UI hierarchy access over plain ADB."""

import subprocess

from loguru import logger

from phone_selector.selectors.errors import BackendError

REMOTE_DUMP_PATH = "/sdcard/uidump.xml"


def get_ui_tree(device_id: str | None = None, timeout: int = 10) -> str | None:
    """
    Dump the current UI hierarchy as XML using uiautomator.

    Args:
        device_id: Optional ADB device serial for multi-device setups.
        timeout: Timeout in seconds for each adb call.

    Returns:
        The hierarchy XML, or None when the dump fails or is unavailable.
    """
    adb_prefix = _get_adb_prefix(device_id)
    try:
        subprocess.run(
            adb_prefix + ["shell", "uiautomator", "dump", REMOTE_DUMP_PATH],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        result = subprocess.run(
            adb_prefix + ["shell", "cat", REMOTE_DUMP_PATH],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("uiautomator dump failed: {}", exc)
        return None
    if result.returncode != 0:
        return None
    xml = result.stdout.strip()
    if "<hierarchy" not in xml:
        return None
    return xml


class AdbSourceClient:
    """
    Source-only backend built on ``uiautomator dump``.

    Native locator queries are not available over plain adb, so
    ``find_element`` always fails; text selectors still resolve through the
    page source fallback and relative or size selectors work unchanged.
    """

    def __init__(self, device_id: str | None = None, timeout: int = 10):
        self.device_id = device_id
        self.timeout = timeout

    def find_element(self, strategy: str, value: str):
        raise BackendError("native locator queries are not supported over adb")

    def source(self) -> str:
        xml = get_ui_tree(self.device_id, self.timeout)
        if xml is None:
            raise BackendError("uiautomator dump returned no hierarchy")
        return xml


def _get_adb_prefix(device_id: str | None) -> list:
    if device_id:
        return ["adb", "-s", device_id]
    return ["adb"]
