"""Audit event types and data models."""

from __future__ import annotations

import time
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic import Field


class AuditEventType(str, Enum):
    """Graph mutations worth an audit record."""

    PERSON_UPSERTED = "PERSON_UPSERTED"
    PERSON_DELETED = "PERSON_DELETED"
    FRIENDSHIP_CREATED = "FRIENDSHIP_CREATED"
    FRIENDSHIP_DELETED = "FRIENDSHIP_DELETED"
    BOOTSTRAP_RUN = "BOOTSTRAP_RUN"


class AuditEvent(BaseModel):
    """A single immutable audit log entry."""

    model_config = {"frozen": True}

    timestamp: float = Field(
        default_factory=time.time,
        description="Unix epoch when the mutation happened.",
    )
    event_type: AuditEventType
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Names and counts involved in the mutation.",
    )
