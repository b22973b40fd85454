"""Integration fixtures: a clean Neo4j database and backend per test."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
async def clean_neo4j(neo4j_driver):
    """Wipe all nodes and relationships before each test."""
    async with neo4j_driver.session() as session:
        await session.run("MATCH (n) DETACH DELETE n")
    yield


@pytest.fixture()
def neo4j_backend(neo4j_driver):
    """A backend sharing the test driver (the driver fixture closes it)."""
    from socialgraph.graph.store import Neo4jBackend

    return Neo4jBackend(neo4j_driver)


@pytest.fixture()
def people(neo4j_backend):
    return neo4j_backend.people


@pytest.fixture()
def friendships(neo4j_backend):
    return neo4j_backend.friendships


@pytest.fixture()
def service(neo4j_backend):
    from socialgraph.service import GraphService

    return GraphService(neo4j_backend)
