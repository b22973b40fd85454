"""Store interfaces shared by the Neo4j and in-memory backends.

The entity store owns ``Person`` records; the relationship store owns the
canonical ``FRIENDS_WITH`` edges.  Both are async so that the Neo4j driver
can suspend at I/O; in-memory implementations never suspend.
"""

from __future__ import annotations

from typing import Protocol

from socialgraph.models.nodes import Person


class EntityStore(Protocol):
    """People keyed by their unique name."""

    async def upsert(
        self, name: str, city: str | None = None, hobby: str | None = None
    ) -> Person:
        """Create *name* or overwrite both of its attributes."""
        ...

    async def get(self, name: str) -> Person | None: ...

    async def list_all(self) -> list[Person]:
        """All people, ascending by name."""
        ...

    async def delete(self, name: str) -> bool:
        """Delete *name* and every friendship touching it.

        Return ``True`` if the person existed.
        """
        ...

    async def find_by_attribute(self, attribute: str, value: str | None) -> list[Person]:
        """People whose *attribute* equals *value*, ascending by name."""
        ...

    async def count(self) -> int: ...


class RelationshipStore(Protocol):
    """Undirected friendships stored in canonical direction."""

    async def create(self, a: str, b: str) -> bool:
        """Return ``True`` only when a new edge was stored."""
        ...

    async def delete(self, a: str, b: str) -> int:
        """Remove the edge between *a* and *b* in either order; return the count."""
        ...

    async def list_neighbors(self, name: str) -> list[Person]: ...

    async def degree_of(self, name: str) -> int: ...

    async def are_friends(self, a: str, b: str) -> bool: ...

    async def cascade_delete(self, name: str) -> int: ...

    async def count(self) -> int: ...


class GraphBackend(Protocol):
    """A storage backend exposing both stores and a raw statement runner."""

    @property
    def people(self) -> EntityStore: ...

    @property
    def friendships(self) -> RelationshipStore: ...

    async def run_statement(self, statement: str) -> None:
        """Execute one opaque bootstrap statement."""
        ...

    async def close(self) -> None: ...
