"""Recording and playback of hierarchy dumps."""

from __future__ import annotations

from pathlib import Path

from phone_selector.selectors.backend import AutomationClient, ElementHandle
from phone_selector.selectors.errors import BackendError


class RecordingSourceClient:
    """Pass-through client that saves every hierarchy dump it returns."""

    def __init__(self, inner: AutomationClient, record_dir: str | Path) -> None:
        self.inner = inner
        self.record_dir = Path(record_dir)
        self.record_dir.mkdir(parents=True, exist_ok=True)
        self.index = 0

    def find_element(self, strategy: str, value: str) -> ElementHandle:
        return self.inner.find_element(strategy, value)

    def source(self) -> str:
        raw = self.inner.source()
        self.index += 1
        dump_file = self.record_dir / f"dump_{self.index:04d}.xml"
        dump_file.write_text(raw, encoding="utf-8")
        return raw


class PlaybackSourceClient:
    """Replay recorded dumps in order; the last one repeats once exhausted."""

    def __init__(self, playback_dir: str | Path) -> None:
        self.playback_dir = Path(playback_dir)
        self.records = sorted(self.playback_dir.glob("dump_*.xml"))
        self.index = 0
        if not self.records:
            raise ValueError(f"No recorded dumps found in {self.playback_dir}")

    def find_element(self, strategy: str, value: str) -> ElementHandle:
        raise BackendError("native locator queries are not available during playback")

    def source(self) -> str:
        record_path = self.records[min(self.index, len(self.records) - 1)]
        self.index += 1
        return record_path.read_text(encoding="utf-8")


class FileSourceClient:
    """Serve a single saved dump."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def find_element(self, strategy: str, value: str) -> ElementHandle:
        raise BackendError("native locator queries are not available for a saved dump")

    def source(self) -> str:
        return self.path.read_text(encoding="utf-8")
