"""
Pytest fixtures for phone_selector tests.
"""

from xml.sax.saxutils import quoteattr

import pytest

from phone_selector.config.timing import FindTimingConfig


_ATTR_NAMES = {
    "resource_id": "resource-id",
    "content_desc": "content-desc",
    "class_name": "class",
}


def node(*children: str, tag: str = "node", **attrs) -> str:
    """Render one hierarchy node; booleans become "true"/"false"."""
    rendered = []
    for key, value in attrs.items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        rendered.append(f"{_ATTR_NAMES.get(key, key)}={quoteattr(str(value))}")
    attr_text = " ".join(rendered)
    if not children:
        return f"<{tag} {attr_text} />"
    return f"<{tag} {attr_text}>{''.join(children)}</{tag}>"


def hierarchy(*nodes: str) -> str:
    return (
        "<?xml version='1.0' encoding='UTF-8' standalone='yes' ?>"
        f"<hierarchy rotation=\"0\">{''.join(nodes)}</hierarchy>"
    )


class FakeElement:
    def __init__(self, text="", rect=None, displayed=True, enabled=True, fail_text=False):
        self._text = text
        self._rect = rect or {"x": 0, "y": 0, "width": 0, "height": 0}
        self._displayed = displayed
        self._enabled = enabled
        self._fail_text = fail_text

    def text(self):
        if self._fail_text:
            raise RuntimeError("stale element")
        return self._text

    def rect(self):
        return self._rect

    def is_displayed(self):
        return self._displayed

    def is_enabled(self):
        return self._enabled


class FakeClient:
    """In-memory automation client.

    ``sources`` is replayed in order, the last entry repeating; an Exception
    entry is raised instead of returned. ``elements`` maps a substring of the
    locator value to the element returned for it; ``find_error`` is raised by
    every locator query instead.
    """

    def __init__(self, sources=None, elements=None, find_error=None):
        self.sources = list(sources or [])
        self.elements = dict(elements or {})
        self.find_error = find_error
        self.find_calls = []
        self.source_calls = 0

    def find_element(self, strategy, value):
        self.find_calls.append((strategy, value))
        if self.find_error is not None:
            raise self.find_error
        for key, element in self.elements.items():
            if key in value:
                return element
        raise LookupError(f"no such element: {value}")

    def source(self):
        if not self.sources:
            raise ConnectionError("no page source configured")
        item = self.sources[min(self.source_calls, len(self.sources) - 1)]
        self.source_calls += 1
        if isinstance(item, Exception):
            raise item
        return item


class FakeClock:
    """Monotonic clock advancing by ``step`` seconds on every read."""

    def __init__(self, step: float = 0.25):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def timing():
    return FindTimingConfig(
        default_find_timeout_ms=17000,
        optional_find_timeout_ms=7000,
        quick_find_timeout_ms=1000,
        max_anchor_depth=16,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def login_screen():
    """Header on top, a stale Login label inside it and a Login button below."""
    return hierarchy(
        node(
            node(
                text="Header",
                bounds="[0,0][1080,50]",
                clickable=False,
            ),
            node(
                text="Login",
                resource_id="com.example:id/hint",
                bounds="[10,30][200,45]",
            ),
            node(
                text="Login",
                resource_id="com.example:id/login",
                bounds="[0,60][1080,100]",
                clickable=True,
                enabled=True,
            ),
            class_name="android.widget.FrameLayout",
            bounds="[0,0][1080,1920]",
        )
    )
