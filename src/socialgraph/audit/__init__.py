"""Audit subsystem: JSONL trail of graph mutations."""

from socialgraph.audit.schemas import AuditEvent
from socialgraph.audit.schemas import AuditEventType
from socialgraph.audit.store import AuditLogger

__all__ = [
    "AuditEvent",
    "AuditEventType",
    "AuditLogger",
]
