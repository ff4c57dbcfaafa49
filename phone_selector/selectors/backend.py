"""Interfaces the resolver expects from an automation server client."""

from __future__ import annotations

from typing import Any, Protocol


class ElementHandle(Protocol):
    """A native element returned by a locator query."""

    def text(self) -> str: ...

    def rect(self) -> dict[str, Any]: ...

    def is_displayed(self) -> bool: ...

    def is_enabled(self) -> bool: ...


class AutomationClient(Protocol):
    def find_element(self, strategy: str, value: str) -> ElementHandle:
        """Run one native locator query; raise on not-found or transport failure."""
        ...

    def source(self) -> str:
        """Return the current UI hierarchy dump."""
        ...
