"""In-memory stores with the same contracts as the Neo4j backend.

People live in a dict keyed by name; friendships in a dict keyed by the
canonical ``(left, right)`` pair, which makes duplicate or reversed edges
unrepresentable.  Nothing here awaits, so every call runs to completion
without interleaving.
"""

from __future__ import annotations

import logging

from socialgraph.models.nodes import Person
from socialgraph.models.nodes import require_attribute
from socialgraph.models.nodes import require_name
from socialgraph.models.relations import canonical_pair
from socialgraph.models.relations import Friendship

logger = logging.getLogger(__name__)


class InMemoryRelationshipStore:
    """Friendship edges over a shared people mapping."""

    def __init__(self, people: dict[str, Person]) -> None:
        self._people = people
        self._edges: dict[tuple[str, str], Friendship] = {}

    async def create(self, a: str, b: str) -> bool:
        if not a or not b or a == b:
            return False
        if a not in self._people or b not in self._people:
            return False
        edge = Friendship.between(a, b)
        if edge.key in self._edges:
            return False
        self._edges[edge.key] = edge
        return True

    async def delete(self, a: str, b: str) -> int:
        if a == b:
            return 0
        removed = self._edges.pop(canonical_pair(a, b), None)
        return 0 if removed is None else 1

    async def list_neighbors(self, name: str) -> list[Person]:
        names = sorted(
            edge.other(name) for edge in self._edges.values() if edge.involves(name)
        )
        return [self._people[n] for n in names if n in self._people]

    async def degree_of(self, name: str) -> int:
        return sum(1 for edge in self._edges.values() if edge.involves(name))

    async def are_friends(self, a: str, b: str) -> bool:
        if a == b:
            return False
        return canonical_pair(a, b) in self._edges

    async def cascade_delete(self, name: str) -> int:
        doomed = [key for key, edge in self._edges.items() if edge.involves(name)]
        for key in doomed:
            del self._edges[key]
        return len(doomed)

    async def count(self) -> int:
        return len(self._edges)

    def edges(self) -> list[Friendship]:
        """Stored edges in canonical order (test helper)."""
        return [self._edges[key] for key in sorted(self._edges)]


class InMemoryEntityStore:
    """People keyed by name; deletion cascades into the relationship store."""

    def __init__(
        self, people: dict[str, Person], friendships: InMemoryRelationshipStore
    ) -> None:
        self._people = people
        self._friendships = friendships

    async def upsert(
        self, name: str, city: str | None = None, hobby: str | None = None
    ) -> Person:
        require_name(name)
        person = Person(name=name, city=city, hobby=hobby)
        self._people[name] = person
        return person

    async def get(self, name: str) -> Person | None:
        return self._people.get(name)

    async def list_all(self) -> list[Person]:
        return [self._people[name] for name in sorted(self._people)]

    async def delete(self, name: str) -> bool:
        if name not in self._people:
            return False
        edges = await self._friendships.cascade_delete(name)
        del self._people[name]
        logger.debug("Deleted person %r with %d friendship(s)", name, edges)
        return True

    async def find_by_attribute(self, attribute: str, value: str | None) -> list[Person]:
        require_attribute(attribute)
        if value is None:
            return []
        return [
            person
            for person in await self.list_all()
            if getattr(person, attribute) == value
        ]

    async def count(self) -> int:
        return len(self._people)


class InMemoryBackend:
    """Both in-memory stores plus a recorder for bootstrap statements.

    Statements are opaque to this backend: they are recorded in order and
    not interpreted.
    """

    def __init__(self) -> None:
        people: dict[str, Person] = {}
        self._friendships = InMemoryRelationshipStore(people)
        self._people = InMemoryEntityStore(people, self._friendships)
        self.executed_statements: list[str] = []

    @property
    def people(self) -> InMemoryEntityStore:
        return self._people

    @property
    def friendships(self) -> InMemoryRelationshipStore:
        return self._friendships

    async def run_statement(self, statement: str) -> None:
        self.executed_statements.append(statement)

    async def close(self) -> None:
        return None
