"""HTTP client for the UIAutomator2 server."""

from __future__ import annotations

from typing import Any

import requests
from loguru import logger

from phone_selector.selectors.errors import BackendError

W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


class Element:
    """A native element handle returned by ``find_element``."""

    def __init__(self, client: "UIAutomator2Client", element_id: str) -> None:
        self.client = client
        self.element_id = element_id

    def __repr__(self) -> str:
        return f"Element({self.element_id!r})"

    def _get(self, endpoint: str) -> Any:
        path = self.client.session_path(f"/element/{self.element_id}/{endpoint}")
        return self.client.request("GET", path).get("value")

    def text(self) -> str:
        return self._get("text") or ""

    def rect(self) -> dict[str, Any]:
        return self._get("rect") or {}

    def is_displayed(self) -> bool:
        return _as_bool(self._get("displayed"))

    def is_enabled(self) -> bool:
        return _as_bool(self._get("enabled"))


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


class UIAutomator2Client:
    """
    Talk to a UIAutomator2 server over its WebDriver HTTP API.

    Example:
        >>> client = UIAutomator2Client("http://127.0.0.1:6790")
        >>> client.create_session()
        >>> xml = client.source()
    """

    def __init__(self, base_url: str = "http://127.0.0.1:6790", timeout: float = 30.0):
        """
        Args:
            base_url: Server address, usually an adb-forwarded local port.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session_id: str | None = None

    def has_session(self) -> bool:
        return bool(self.session_id)

    def session_path(self, path: str) -> str:
        if not self.session_id:
            raise BackendError("no active session")
        return f"/session/{self.session_id}{path}"

    def request(self, method: str, path: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Send one request and decode the JSON reply.

        Raises:
            BackendError: Transport failure, error status or undecodable body.
        """
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise BackendError(f"send request: {exc}") from exc

        if response.status_code >= 400:
            try:
                data = response.json()
            except ValueError:
                data = None
            value = data.get("value") if isinstance(data, dict) else None
            if isinstance(value, dict):
                raise BackendError(f"{value.get('error', '')}: {value.get('message', '')}")
            raise BackendError(f"server error {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as exc:
            raise BackendError(f"decode response: {exc}") from exc
        if not isinstance(data, dict):
            raise BackendError(f"unexpected response: {data!r}")
        return data

    def status(self) -> bool:
        """Return True when the server reports itself ready."""
        value = self.request("GET", "/status").get("value") or {}
        return bool(value.get("ready"))

    def create_session(self, capabilities: dict[str, Any] | None = None) -> str:
        data = self.request("POST", "/session", {"capabilities": capabilities or {}})
        session_id = data.get("sessionId") or (data.get("value") or {}).get("sessionId")
        if not session_id:
            raise BackendError("no session ID in response")
        self.session_id = session_id
        logger.debug("UIAutomator2 session {} started", session_id)
        return session_id

    def delete_session(self) -> None:
        if not self.session_id:
            return
        try:
            self.request("DELETE", self.session_path(""))
        finally:
            self.session_id = None

    def close(self) -> None:
        self.delete_session()

    def find_element(self, strategy: str, value: str) -> Element:
        data = self.request(
            "POST", self.session_path("/element"), {"strategy": strategy, "selector": value}
        )
        payload = data.get("value") or {}
        element_id = payload.get(W3C_ELEMENT_KEY) or payload.get("ELEMENT")
        if not element_id:
            raise BackendError(f"no such element: {strategy} {value}")
        return Element(self, element_id)

    def source(self) -> str:
        value = self.request("GET", self.session_path("/source")).get("value")
        if not isinstance(value, str):
            raise BackendError("unexpected page source response")
        return value
