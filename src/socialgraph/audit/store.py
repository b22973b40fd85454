"""Append-only JSONL audit trail of graph mutations."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from socialgraph.audit.schemas import AuditEvent
from socialgraph.audit.schemas import AuditEventType
from socialgraph.config import AuditConfig

logger = logging.getLogger(__name__)


class AuditLogger:
    """Writes one JSON line per mutation.

    File I/O runs in a worker thread; an ``asyncio.Lock`` keeps lines from
    interleaving.
    """

    def __init__(self, config: AuditConfig) -> None:
        self.config = config
        self._path = Path(config.file_path)
        self._lock = asyncio.Lock()

    async def log(self, event: AuditEvent) -> None:
        """Append *event* to the audit file (no-op when disabled)."""
        if not self.config.enabled:
            return
        line = event.model_dump_json() + "\n"
        async with self._lock:
            await asyncio.to_thread(self._append, line)

    async def record(self, event_type: AuditEventType, **payload: Any) -> None:
        """Build and log an event in one call."""
        await self.log(AuditEvent(event_type=event_type, payload=payload))

    def _append(self, line: str) -> None:
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(line)

    async def read_events(
        self,
        *,
        event_type: AuditEventType | None = None,
        since: float | None = None,
    ) -> list[AuditEvent]:
        """Read events back, optionally filtered by type and timestamp."""
        if not self._path.exists():
            return []

        async with self._lock:
            raw = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        events: list[AuditEvent] = []
        for line_no, line in enumerate(raw.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                event = AuditEvent.model_validate_json(line)
            except ValidationError:
                logger.warning(
                    "Skipping malformed audit line %d in %s", line_no, self._path
                )
                continue
            if event_type is not None and event.event_type != event_type:
                continue
            if since is not None and event.timestamp < since:
                continue
            events.append(event)
        return events
