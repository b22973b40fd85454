"""Unit test fixtures: in-memory backend, service and latency reset."""

from __future__ import annotations

import pytest

from socialgraph.graph.memory import InMemoryBackend
from socialgraph.observability import reset_latency_metrics
from socialgraph.service import GraphService


@pytest.fixture()
def backend():
    return InMemoryBackend()


@pytest.fixture()
def people(backend):
    return backend.people


@pytest.fixture()
def friendships(backend):
    return backend.friendships


@pytest.fixture()
def service(backend):
    return GraphService(backend)


@pytest.fixture()
async def scenario_service(service):
    """Service seeded with Ana/Beto (Rosario, lectura) and Caro (Cordoba, ajedrez)."""
    await service.add_person("Ana", "Rosario", "lectura")
    await service.add_person("Beto", "Rosario", "lectura")
    await service.add_person("Caro", "Cordoba", "ajedrez")
    return service


@pytest.fixture(autouse=True)
def _clean_latency_metrics():
    reset_latency_metrics()
    yield
    reset_latency_metrics()
