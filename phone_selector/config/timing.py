"""Timing configuration for element resolution.

All find timeouts are in milliseconds. Each value can be overridden by
editing the defaults here or by setting the matching environment variable.
"""

import os
from dataclasses import dataclass


@dataclass
class FindTimingConfig:
    """Timeout tiers used when resolving selectors."""

    default_find_timeout_ms: int = 17000  # required elements
    optional_find_timeout_ms: int = 7000  # elements marked optional
    quick_find_timeout_ms: int = 1000  # assertNotVisible, caller-driven polling
    max_anchor_depth: int = 16  # nesting limit for relative anchors

    def __post_init__(self):
        """Load values from the environment when present."""
        self.default_find_timeout_ms = int(
            os.getenv("PHONE_SELECTOR_FIND_TIMEOUT_MS", self.default_find_timeout_ms)
        )
        self.optional_find_timeout_ms = int(
            os.getenv(
                "PHONE_SELECTOR_OPTIONAL_FIND_TIMEOUT_MS", self.optional_find_timeout_ms
            )
        )
        self.quick_find_timeout_ms = int(
            os.getenv("PHONE_SELECTOR_QUICK_FIND_TIMEOUT_MS", self.quick_find_timeout_ms)
        )
        self.max_anchor_depth = int(
            os.getenv("PHONE_SELECTOR_MAX_ANCHOR_DEPTH", self.max_anchor_depth)
        )


@dataclass
class TimingConfig:
    """Aggregate of all timing settings."""

    find: FindTimingConfig

    def __init__(self):
        self.find = FindTimingConfig()


# Global timing instance, adjustable at runtime or through the environment
TIMING_CONFIG = TimingConfig()


def get_timing_config() -> TimingConfig:
    """
    Return the global timing configuration.

    Returns:
        The global TimingConfig instance.
    """
    return TIMING_CONFIG


def update_timing_config(find: FindTimingConfig | None = None) -> None:
    """
    Replace parts of the global timing configuration.

    Args:
        find: New find timeout configuration.

    Example:
        >>> from phone_selector.config.timing import update_timing_config, FindTimingConfig
        >>> update_timing_config(find=FindTimingConfig(default_find_timeout_ms=5000))
    """
    global TIMING_CONFIG
    if find is not None:
        TIMING_CONFIG.find = find


__all__ = [
    "FindTimingConfig",
    "TimingConfig",
    "TIMING_CONFIG",
    "get_timing_config",
    "update_timing_config",
]
