"""Root conftest: suite markers and the session-scoped Neo4j testcontainer.

Unit tests run against the in-memory backend and never touch Docker.
Integration tests request ``neo4j_driver`` and are skipped when no Docker
daemon is reachable.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
import time

import pytest
from dotenv import load_dotenv
from neo4j import AsyncGraphDatabase
from testcontainers.core.container import DockerContainer

logger = logging.getLogger(__name__)

# Load repository-root .env for test opt-ins (existing env vars stay authoritative).
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Attach suite markers from test path.

    - `tests/unit/*` -> `unit`
    - `tests/integration/*` -> `integration`
    """
    root = Path(__file__).resolve().parents[1]
    for item in items:
        item_path = Path(str(item.fspath)).resolve()
        try:
            rel = item_path.relative_to(root)
        except ValueError:
            continue

        parts = rel.parts
        if len(parts) < 2 or parts[0] != "tests":
            continue
        if parts[1] == "unit":
            item.add_marker(pytest.mark.unit)
        elif parts[1] == "integration":
            item.add_marker(pytest.mark.integration)


# ---------------------------------------------------------------------------
# Neo4j
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def neo4j_container():
    """Spin up a Neo4j Community container and yield its bolt URI.

    Session-scoped: one container for the entire test run.
    """
    container = (
        DockerContainer("neo4j:community")
        .with_exposed_ports(7687)
        .with_env("NEO4J_AUTH", "none")
    )
    try:
        container.start()
    except Exception as exc:
        pytest.skip(f"Docker is not available for Neo4j tests: {exc}")

    try:
        host = container.get_container_host_ip()
        port = container.get_exposed_port(7687)
        uri = f"bolt://{host}:{port}"

        async def wait_for_neo4j():
            driver = AsyncGraphDatabase.driver(uri)
            max_attempts = 60
            try:
                for attempt in range(max_attempts):
                    try:
                        await driver.verify_connectivity()
                        return
                    except Exception as exc:
                        if attempt == max_attempts - 1:
                            raise
                        logger.debug(
                            "Neo4j not ready (attempt %d/%d): %s",
                            attempt + 1,
                            max_attempts,
                            exc,
                        )
                        time.sleep(1)
            finally:
                await driver.close()

        asyncio.run(wait_for_neo4j())
        yield uri
    finally:
        container.stop()


@pytest.fixture(scope="session")
def _graph_schema_initialized(neo4j_container):
    """Create the Person constraint and indexes once per session."""
    from socialgraph.graph.schema import init_schema

    async def _init():
        driver = AsyncGraphDatabase.driver(neo4j_container)
        await init_schema(driver)
        await driver.close()

    asyncio.run(_init())
    return True


@pytest.fixture()
async def neo4j_driver(neo4j_container, _graph_schema_initialized):
    """Yield an async Neo4j driver connected to the test container."""
    driver = AsyncGraphDatabase.driver(neo4j_container)
    yield driver
    await driver.close()
