"""Pydantic model for the ``Person`` node.

A person is keyed by its ``name``; ``city`` and ``hobby`` are plain scalar
attributes that every upsert overwrites as a pair.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field

from socialgraph.errors import ValidationError

# Attributes a recommendation may match on.
PERSON_ATTRIBUTES = ("city", "hobby")


def require_name(value: str | None, *, field_name: str = "name") -> str:
    """Return *value* unchanged, or raise if it is missing or blank.

    Names are case-sensitive and stored exactly as given; surrounding
    whitespace only matters for the emptiness check.
    """
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} must be a non-empty string")
    return value


def require_attribute(attribute: str) -> str:
    if attribute not in PERSON_ATTRIBUTES:
        msg = f"Invalid person attribute: {attribute!r}"
        raise ValueError(msg)
    return attribute


class Person(BaseModel):
    """A named member of the social graph."""

    model_config = {"frozen": True}

    name: str = Field(
        min_length=1,
        description="Unique, case-sensitive identifier of the person.",
    )
    city: str | None = Field(
        default=None,
        description="City the person lives in.",
    )
    hobby: str | None = Field(
        default=None,
        description="Main hobby of the person.",
    )

    def properties(self) -> dict:
        """Property map written to the Person node (nulls are not stored)."""
        return self.model_dump(exclude_none=True)

    def to_display(self) -> dict[str, str]:
        """Blank-safe view used by presentation layers."""
        return {
            "name": self.name,
            "city": self.city or "",
            "hobby": self.hobby or "",
        }
