"""Configuration for phone_selector."""

from phone_selector.config.timing import (
    TIMING_CONFIG,
    FindTimingConfig,
    TimingConfig,
    get_timing_config,
    update_timing_config,
)

__all__ = [
    "TIMING_CONFIG",
    "TimingConfig",
    "FindTimingConfig",
    "get_timing_config",
    "update_timing_config",
]
