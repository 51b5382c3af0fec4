"""Session recording for offline analysis of an orrery run."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from .model import CelestialBody


class SessionRecorder:
    """Buffered recorder that stores body samples and UI events as CSV files.

    Parameters
    ----------
    root_dir:
        Directory under which one folder per session is created.
    session_id:
        Optional custom identifier. Defaults to ``YYYYmmdd_HHMMSS_session``;
        a numeric suffix is appended when the folder already exists.
    samples_flush_threshold:
        Buffered sample rows before an automatic flush to disk.
    events_flush_threshold:
        Buffered event rows before an automatic flush to disk.
    """

    SAMPLES_HEADER = ["t", "body", "x", "y", "z", "phase"]
    EVENTS_HEADER = ["t", "type", "body", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/sessions",
        session_id: Optional[str] = None,
        *,
        samples_flush_threshold: int = 500,
        events_flush_threshold: int = 20,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base = session_id or f"{timestamp}_session"
        candidate_id = base
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = f"{base}_{suffix:02d}"
            suffix += 1

        self.session_id = candidate_id
        self.session_dir = self.root_dir / self.session_id
        self.session_dir.mkdir(parents=True, exist_ok=False)

        self.samples_path = self.session_dir / "samples.csv"
        self.events_path = self.session_dir / "events.csv"
        self.meta_path = self.session_dir / "meta.json"

        self._samples_file = self.samples_path.open("w", newline="", encoding="utf-8")
        self._samples_file.write(",".join(self.SAMPLES_HEADER) + "\n")
        self._samples_file.flush()
        self._events_file = self.events_path.open("w", newline="", encoding="utf-8")
        self._events_file.write(",".join(self.EVENTS_HEADER) + "\n")
        self._events_file.flush()

        self._samples_buffer: list[str] = []
        self._events_buffer: list[str] = []
        self._samples_threshold = max(1, samples_flush_threshold)
        self._events_threshold = max(1, events_flush_threshold)
        self._closed = False

        (self.root_dir / "last_session.txt").write_text(self.session_id, encoding="utf-8")

    @property
    def closed(self) -> bool:
        return self._closed

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_bodies(self, t: float, bodies: Iterable[CelestialBody]) -> None:
        if self._closed:
            return
        for body in bodies:
            x, y, z = body.position
            self._samples_buffer.append(
                ",".join(
                    [
                        self._format_value(t),
                        self._quote(body.name),
                        self._format_value(x),
                        self._format_value(y),
                        self._format_value(z),
                        self._format_value(body.phase),
                    ]
                )
            )
        if len(self._samples_buffer) >= self._samples_threshold:
            self._flush_samples()

    def log_event(self, t: float, event_type: str, body: str | None = None, details: dict | None = None) -> None:
        if self._closed:
            return
        details_text = json.dumps(details, sort_keys=True) if details else ""
        self._events_buffer.append(
            ",".join(
                [
                    self._format_value(t),
                    self._quote(event_type),
                    self._quote(body or ""),
                    self._quote(details_text),
                ]
            )
        )
        if len(self._events_buffer) >= self._events_threshold:
            self._flush_events()

    def close(self) -> None:
        if self._closed:
            return
        self._flush_samples()
        self._flush_events()
        self._samples_file.close()
        self._events_file.close()
        self._closed = True

    def _flush_samples(self) -> None:
        if self._samples_buffer:
            self._samples_file.write("\n".join(self._samples_buffer) + "\n")
            self._samples_file.flush()
            self._samples_buffer.clear()

    def _flush_events(self) -> None:
        if self._events_buffer:
            self._events_file.write("\n".join(self._events_buffer) + "\n")
            self._events_file.flush()
            self._events_buffer.clear()

    @staticmethod
    def _format_value(value: float) -> str:
        return f"{float(value):.10g}"

    @staticmethod
    def _quote(text: str) -> str:
        if not any(char in text for char in ',"\r\n'):
            return text
        return '"' + text.replace('"', '""') + '"'

    def __enter__(self) -> "SessionRecorder":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["SessionRecorder"]
