"""Neo4j-backed stores for people and friendships.

Every operation opens its own session through ``_session`` and runs one
auto-commit Cypher statement, so each call is atomic on its own and the
session is released on every exit path.  Driver exceptions are translated
into the ``socialgraph.errors`` taxonomy at that same boundary.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from neo4j import AsyncDriver
from neo4j import AsyncGraphDatabase
from neo4j import AsyncSession
from neo4j import time as neo4j_time
from neo4j.exceptions import ConstraintError
from neo4j.exceptions import DriverError
from neo4j.exceptions import Neo4jError

from socialgraph.config import Neo4jConfig
from socialgraph.errors import BackendError
from socialgraph.errors import ValidationError
from socialgraph.models.nodes import Person
from socialgraph.models.nodes import require_attribute
from socialgraph.models.nodes import require_name
from socialgraph.models.relations import canonical_pair
from socialgraph.models.relations import Friendship

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Session and serialization helpers
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _session(
    driver: AsyncDriver, database: str | None = None
) -> AsyncIterator[AsyncSession]:
    """Yield a session, translating driver failures raised while it is open."""
    try:
        async with driver.session(database=database) as session:
            yield session
    except ConstraintError as exc:
        raise ValidationError(exc.message or str(exc)) from exc
    except (Neo4jError, DriverError) as exc:
        raise BackendError(str(exc)) from exc


def _neo4j_to_python(value: object) -> object:
    if isinstance(value, (neo4j_time.DateTime, neo4j_time.Date)):
        return value.to_native()
    return value


def _to_person(props: dict) -> Person:
    """Rebuild a ``Person`` from a ``properties(p)`` map."""
    return Person.model_validate({k: _neo4j_to_python(v) for k, v in props.items()})


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


# ---------------------------------------------------------------------------
# Entity store
# ---------------------------------------------------------------------------


class Neo4jEntityStore:
    """``Person`` nodes keyed by the unique ``name`` property."""

    def __init__(self, driver: AsyncDriver, *, database: str | None = None) -> None:
        self._driver = driver
        self._database = database

    async def upsert(
        self, name: str, city: str | None = None, hobby: str | None = None
    ) -> Person:
        require_name(name)
        person = Person(name=name, city=city, hobby=hobby)
        # SET p = map replaces every property, dropping city/hobby left as None.
        query = (
            "MERGE (p:Person {name: $name}) "
            "SET p = $props "
            "RETURN properties(p) AS props"
        )
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, name=name, props=person.properties())
            record = await result.single()
            return _to_person(record["props"])

    async def get(self, name: str) -> Person | None:
        query = "MATCH (p:Person {name: $name}) RETURN properties(p) AS props"
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, name=name)
            record = await result.single()
            if record is None:
                return None
            return _to_person(record["props"])

    async def list_all(self) -> list[Person]:
        query = "MATCH (p:Person) RETURN properties(p) AS props ORDER BY p.name"
        return await self._run_people_query(query)

    async def delete(self, name: str) -> bool:
        query = (
            "MATCH (p:Person {name: $name}) "
            "OPTIONAL MATCH (p)-[f:FRIENDS_WITH]-() "
            "WITH p, count(f) AS edges "
            "DETACH DELETE p "
            "RETURN edges"
        )
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, name=name)
            record = await result.single()
            if record is None:
                return False
            logger.debug(
                "Deleted person %r with %d friendship(s)", name, record["edges"]
            )
            return True

    async def find_by_attribute(self, attribute: str, value: str | None) -> list[Person]:
        require_attribute(attribute)
        if value is None:
            return []
        query = (
            f"MATCH (p:Person) WHERE p.{attribute} = $value "
            "RETURN properties(p) AS props ORDER BY p.name"
        )
        return await self._run_people_query(query, value=value)

    async def count(self) -> int:
        async with _session(self._driver, self._database) as session:
            result = await session.run("MATCH (p:Person) RETURN count(p) AS cnt")
            record = await result.single()
            return record["cnt"]

    async def _run_people_query(self, query: str, **params: object) -> list[Person]:
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, **params)
            return [_to_person(record["props"]) async for record in result]


# ---------------------------------------------------------------------------
# Relationship store
# ---------------------------------------------------------------------------


class Neo4jRelationshipStore:
    """Canonical ``(left)-[:FRIENDS_WITH]->(right)`` edges, read undirected."""

    def __init__(self, driver: AsyncDriver, *, database: str | None = None) -> None:
        self._driver = driver
        self._database = database

    async def create(self, a: str, b: str) -> bool:
        if _blank(a) or _blank(b) or a == b:
            return False
        edge = Friendship.between(a, b)
        # Existence is checked undirected, so a reversed edge written by
        # another client also counts; new edges always point left -> right.
        query = (
            "MATCH (l:Person {name: $left}), (r:Person {name: $right}) "
            "OPTIONAL MATCH (l)-[e:FRIENDS_WITH]-(r) "
            "WITH l, r, count(e) AS existing "
            "WHERE existing = 0 "
            "CREATE (l)-[f:FRIENDS_WITH]->(r) "
            "SET f.created_at = $created_at"
        )
        async with _session(self._driver, self._database) as session:
            result = await session.run(
                query,
                left=edge.left,
                right=edge.right,
                created_at=edge.created_at,
            )
            summary = await result.consume()
            return summary.counters.relationships_created > 0

    async def delete(self, a: str, b: str) -> int:
        if a == b:
            return 0
        left, right = canonical_pair(a, b)
        query = (
            "MATCH (a:Person {name: $left})-[f:FRIENDS_WITH]-(b:Person {name: $right}) "
            "DELETE f "
            "RETURN count(f) AS deleted"
        )
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, left=left, right=right)
            record = await result.single()
            return record["deleted"]

    async def list_neighbors(self, name: str) -> list[Person]:
        query = (
            "MATCH (:Person {name: $name})-[:FRIENDS_WITH]-(f:Person) "
            "WITH DISTINCT f "
            "RETURN properties(f) AS props, f.name AS name "
            "ORDER BY name"
        )
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, name=name)
            return [_to_person(record["props"]) async for record in result]

    async def degree_of(self, name: str) -> int:
        query = (
            "MATCH (:Person {name: $name})-[f:FRIENDS_WITH]-() "
            "RETURN count(f) AS degree"
        )
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, name=name)
            record = await result.single()
            return record["degree"]

    async def are_friends(self, a: str, b: str) -> bool:
        if a == b:
            return False
        left, right = canonical_pair(a, b)
        query = (
            "MATCH (:Person {name: $left})-[f:FRIENDS_WITH]-(:Person {name: $right}) "
            "RETURN count(f) > 0 AS linked"
        )
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, left=left, right=right)
            record = await result.single()
            return record["linked"]

    async def cascade_delete(self, name: str) -> int:
        query = (
            "MATCH (:Person {name: $name})-[f:FRIENDS_WITH]-() "
            "DELETE f "
            "RETURN count(f) AS deleted"
        )
        async with _session(self._driver, self._database) as session:
            result = await session.run(query, name=name)
            record = await result.single()
            return record["deleted"]

    async def count(self) -> int:
        # Directed pattern: one row per stored edge.
        query = "MATCH ()-[f:FRIENDS_WITH]->() RETURN count(f) AS cnt"
        async with _session(self._driver, self._database) as session:
            result = await session.run(query)
            record = await result.single()
            return record["cnt"]


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------


class Neo4jBackend:
    """Both Neo4j stores sharing one driver."""

    def __init__(self, driver: AsyncDriver, *, database: str | None = None) -> None:
        self._driver = driver
        self._database = database
        self._people = Neo4jEntityStore(driver, database=database)
        self._friendships = Neo4jRelationshipStore(driver, database=database)

    @classmethod
    def from_config(cls, config: Neo4jConfig) -> Neo4jBackend:
        try:
            driver = AsyncGraphDatabase.driver(config.uri, auth=config.auth)
        except (DriverError, ValueError) as exc:
            raise BackendError(
                f"Invalid Neo4j settings for {config.uri!r}: {exc}"
            ) from exc
        return cls(driver, database=config.database)

    @property
    def people(self) -> Neo4jEntityStore:
        return self._people

    @property
    def friendships(self) -> Neo4jRelationshipStore:
        return self._friendships

    async def verify_connectivity(self) -> None:
        try:
            await self._driver.verify_connectivity()
        except (Neo4jError, DriverError) as exc:
            raise BackendError(f"Cannot reach Neo4j: {exc}") from exc

    async def run_statement(self, statement: str) -> None:
        async with _session(self._driver, self._database) as session:
            result = await session.run(statement)
            await result.consume()

    async def close(self) -> None:
        await self._driver.close()
