"""Unit tests for the audit logger."""

from __future__ import annotations

import json
from pathlib import Path

from socialgraph.audit import AuditEvent
from socialgraph.audit import AuditEventType
from socialgraph.audit import AuditLogger
from socialgraph.config import AuditConfig


def _config(tmp_path: Path, *, enabled: bool = True) -> AuditConfig:
    return AuditConfig(file_path=str(tmp_path / "audit.jsonl"), enabled=enabled)


class TestAuditLogWrite:
    async def test_log_appends_one_json_line(self, tmp_path):
        audit = AuditLogger(_config(tmp_path))
        await audit.log(
            AuditEvent(
                timestamp=100.0,
                event_type=AuditEventType.PERSON_UPSERTED,
                payload={"name": "Ana"},
            )
        )
        lines = (tmp_path / "audit.jsonl").read_text().splitlines()
        assert len(lines) == 1
        data = json.loads(lines[0])
        assert data["event_type"] == "PERSON_UPSERTED"
        assert data["payload"] == {"name": "Ana"}
        assert data["timestamp"] == 100.0

    async def test_record_builds_event(self, tmp_path):
        audit = AuditLogger(_config(tmp_path))
        await audit.record(AuditEventType.PERSON_DELETED, name="Beto")
        [event] = await audit.read_events()
        assert event.event_type == AuditEventType.PERSON_DELETED
        assert event.payload == {"name": "Beto"}

    async def test_disabled_logger_writes_nothing(self, tmp_path):
        audit = AuditLogger(_config(tmp_path, enabled=False))
        await audit.record(AuditEventType.PERSON_DELETED, name="Beto")
        assert not (tmp_path / "audit.jsonl").exists()
        assert await audit.read_events() == []


class TestAuditLogRead:
    async def test_filters_by_type_and_time(self, tmp_path):
        audit = AuditLogger(_config(tmp_path))
        await audit.log(
            AuditEvent(timestamp=1.0, event_type=AuditEventType.FRIENDSHIP_CREATED)
        )
        await audit.log(
            AuditEvent(timestamp=2.0, event_type=AuditEventType.FRIENDSHIP_DELETED)
        )
        await audit.log(
            AuditEvent(timestamp=3.0, event_type=AuditEventType.FRIENDSHIP_CREATED)
        )
        created = await audit.read_events(event_type=AuditEventType.FRIENDSHIP_CREATED)
        assert [e.timestamp for e in created] == [1.0, 3.0]
        recent = await audit.read_events(since=2.0)
        assert [e.timestamp for e in recent] == [2.0, 3.0]

    async def test_skips_malformed_lines(self, tmp_path, caplog):
        path = tmp_path / "audit.jsonl"
        audit = AuditLogger(_config(tmp_path))
        await audit.record(AuditEventType.BOOTSTRAP_RUN, total=0)
        with path.open("a") as fh:
            fh.write("not json\n")
        await audit.record(AuditEventType.BOOTSTRAP_RUN, total=1)

        events = await audit.read_events()
        assert [e.payload["total"] for e in events] == [0, 1]
        assert "malformed audit line 2" in caplog.text
