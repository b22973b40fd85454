"""Pydantic models for service results and the MCP interface.

Input validation happens in the stores; these models only shape the
records handed back to driving shells.  FastMCP serializes them as-is.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field

from socialgraph.models.nodes import Person

# ---------------------------------------------------------------------------
# Core results
# ---------------------------------------------------------------------------


class GraphStats(BaseModel):
    """Aggregate counts over the whole graph."""

    model_config = {"frozen": True}

    total_people: int = Field(description="Number of Person nodes.")
    total_friendships: int = Field(
        description="Number of undirected friendship edges.",
    )
    average_friends_per_person: float = Field(
        description="total_friendships / total_people, or 0.0 when empty.",
    )


class StatementFailure(BaseModel):
    """One bootstrap statement that raised."""

    index: int = Field(description="Zero-based position in the batch.")
    statement: str
    message: str


class BootstrapReport(BaseModel):
    """Outcome of applying a bootstrap batch."""

    total: int = 0
    executed: int = 0
    failures: list[StatementFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


# ---------------------------------------------------------------------------
# MCP output models
# ---------------------------------------------------------------------------


class PersonResult(BaseModel):
    """Result of add_person / find_person."""

    status: str = Field(default="ok", description="'ok', 'not_found' or 'error'.")
    person: Person | None = None
    error_code: str | None = None
    message: str | None = None


class PeopleResult(BaseModel):
    """Result of every tool returning a list of people."""

    status: str = "ok"
    people: list[Person] = Field(default_factory=list)
    count: int = 0
    error_code: str | None = None
    message: str | None = None


class MutationResult(BaseModel):
    """Result of create/delete tools."""

    status: str = Field(
        default="ok",
        description="'ok', 'unchanged' or 'error'.",
    )
    changed: int = Field(
        default=0,
        description="Number of nodes or edges created or removed.",
    )
    error_code: str | None = None
    message: str | None = None


class StatsResult(BaseModel):
    """Result of the stats tool."""

    status: str = "ok"
    stats: GraphStats | None = None
    error_code: str | None = None
    message: str | None = None
