"""Pydantic model for the symmetric ``FRIENDS_WITH`` relationship.

A friendship is stored as a single directed record whose endpoints follow
a total order on names: ``(left)-[:FRIENDS_WITH]->(right)`` with
``left < right``.  Every create, delete and adjacency test canonicalizes
its arguments first, so ``{A, B}`` and ``{B, A}`` resolve to the same edge.
"""

from __future__ import annotations

from datetime import datetime
from datetime import timezone

from pydantic import BaseModel
from pydantic import Field
from pydantic import model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def canonical_pair(a: str, b: str) -> tuple[str, str]:
    """Order two endpoint names so the smaller one comes first."""
    return (a, b) if a <= b else (b, a)


class Friendship(BaseModel):
    """An undirected edge between two distinct people."""

    model_config = {"frozen": True}

    left: str = Field(description="Smaller endpoint name.")
    right: str = Field(description="Larger endpoint name.")
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the friendship was created.",
    )

    @model_validator(mode="after")
    def _check_canonical(self) -> Friendship:
        if self.left == self.right:
            raise ValueError("a person cannot befriend themselves")
        if self.left > self.right:
            raise ValueError("endpoints must be in canonical order")
        return self

    @classmethod
    def between(cls, a: str, b: str) -> Friendship:
        """Build the canonical edge for the unordered pair ``{a, b}``."""
        left, right = canonical_pair(a, b)
        return cls(left=left, right=right)

    @property
    def key(self) -> tuple[str, str]:
        return (self.left, self.right)

    def involves(self, name: str) -> bool:
        return name in (self.left, self.right)

    def other(self, name: str) -> str:
        """Return the endpoint opposite to *name*."""
        if name == self.left:
            return self.right
        if name == self.right:
            return self.left
        msg = f"{name!r} is not an endpoint of this friendship"
        raise ValueError(msg)
