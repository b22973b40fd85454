"""Neo4j schema statements and bootstrap batch loading.

All schema statements use ``IF NOT EXISTS`` so they are safe to run
repeatedly.  The uniqueness constraint on ``Person.name`` is what keeps
concurrent ``MERGE`` calls from creating duplicate people.
"""

from __future__ import annotations

from pathlib import Path

from neo4j import AsyncDriver

# ---------------------------------------------------------------------------
# Constraint and index statements
# ---------------------------------------------------------------------------

_CONSTRAINTS = [
    "CREATE CONSTRAINT person_unique_name IF NOT EXISTS "
    "FOR (p:Person) REQUIRE p.name IS UNIQUE",
]

_NODE_INDEXES = [
    # Recommendation lookups
    "CREATE INDEX person_city IF NOT EXISTS FOR (p:Person) ON (p.city)",
    "CREATE INDEX person_hobby IF NOT EXISTS FOR (p:Person) ON (p.hobby)",
]

SCHEMA_STATEMENTS = _CONSTRAINTS + _NODE_INDEXES


async def init_schema(driver: AsyncDriver, *, database: str | None = None) -> None:
    """Create the Person constraint and indexes (idempotent).

    Runs each statement in its own transaction; Neo4j refuses to mix
    schema commands in one.
    """
    async with driver.session(database=database) as session:
        for stmt in SCHEMA_STATEMENTS:
            await session.run(stmt)


# ---------------------------------------------------------------------------
# Bootstrap batches
# ---------------------------------------------------------------------------


def split_statements(text: str) -> list[str]:
    """Split a Cypher script on ``;`` into trimmed, non-empty statements.

    Lines starting with ``//`` are dropped first so that a commented-out
    statement does not swallow the next one.
    """
    lines = [
        line for line in text.splitlines() if not line.lstrip().startswith("//")
    ]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def load_bootstrap_file(path: str | Path) -> list[str]:
    """Read a Cypher file and return its statements in order."""
    return split_statements(Path(path).read_text(encoding="utf-8"))
