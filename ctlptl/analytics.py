"""File-based usage analytics.

Counter events are buffered in memory and appended as JSON lines to
``~/.ctlptl/analytics/events.jsonl`` when flushed. Flushing runs on a
background thread with a fixed time budget; analytics never raise into the
command that emits them.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from ctlptl import __version__
from ctlptl.config import Settings

logger = logging.getLogger(__name__)

EVENTS_FILE = "events.jsonl"


@dataclass
class CounterEvent:
    """A single counter increment."""

    name: str
    tags: dict[str, str] = field(default_factory=dict)
    id: str = ""
    version: str = __version__
    timestamp: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            self.id = uuid.uuid4().hex[:12]
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()


class Analytics:
    """Buffers counter events and flushes them to a JSONL file.

    Usable as a context manager; leaving the block flushes with the
    configured timeout whether or not the block raised.
    """

    def __init__(
        self,
        base_dir: str | Path | None = None,
        enabled: bool = True,
        flush_timeout: float = 1.0,
    ) -> None:
        self._base = Path(base_dir) if base_dir else Path.home() / ".ctlptl" / "analytics"
        self.enabled = enabled
        self.flush_timeout = flush_timeout
        self._pending: list[CounterEvent] = []
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> Analytics:
        return cls(
            base_dir=settings.ANALYTICS_DIR,
            enabled=settings.ANALYTICS_ENABLED,
            flush_timeout=settings.ANALYTICS_FLUSH_TIMEOUT,
        )

    @property
    def events_file(self) -> Path:
        return self._base / EVENTS_FILE

    @property
    def pending(self) -> list[CounterEvent]:
        with self._lock:
            return list(self._pending)

    # -- recording -----------------------------------------------------------

    def incr(self, name: str, tags: dict[str, str] | None = None) -> None:
        """Record a counter event. A no-op when analytics are disabled."""
        if not self.enabled:
            return
        with self._lock:
            self._pending.append(CounterEvent(name=name, tags=dict(tags or {})))

    # -- flushing ------------------------------------------------------------

    def flush(self, timeout: float | None = None) -> bool:
        """Write pending events, waiting at most ``timeout`` seconds.

        Returns True if the write finished in time. A write that overruns is
        left to finish on its daemon thread.
        """
        with self._lock:
            events, self._pending = self._pending, []
        if not events:
            return True

        timeout = self.flush_timeout if timeout is None else timeout
        worker = threading.Thread(
            target=self._write_events, args=(events,), name="ctlptl-analytics", daemon=True
        )
        worker.start()
        worker.join(timeout)
        if worker.is_alive():
            logger.debug("analytics flush exceeded %.1fs, abandoning", timeout)
            return False
        return True

    def _write_events(self, events: list[CounterEvent]) -> None:
        try:
            self._base.mkdir(parents=True, exist_ok=True)
            with open(self.events_file, "a", encoding="utf-8") as f:
                for event in events:
                    f.write(json.dumps(asdict(event)) + "\n")
        except OSError as e:
            logger.debug("analytics flush failed: %s", e)

    def __enter__(self) -> Analytics:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.flush()
        except Exception as e:  # never mask the command's own outcome
            logger.debug("analytics flush failed: %s", e)
