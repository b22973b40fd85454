"""Graph domain: entity and relationship stores plus schema management.

Exports are loaded lazily: importing the package does not import either
backend until one of its names is used.
"""

from __future__ import annotations

from importlib import import_module

__all__ = [
    "EntityStore",
    "GraphBackend",
    "InMemoryBackend",
    "InMemoryEntityStore",
    "InMemoryRelationshipStore",
    "Neo4jBackend",
    "Neo4jEntityStore",
    "Neo4jRelationshipStore",
    "RelationshipStore",
    "SCHEMA_STATEMENTS",
    "init_schema",
    "load_bootstrap_file",
    "split_statements",
]


_EXPORT_TO_MODULE = {
    "EntityStore": "socialgraph.graph.base",
    "GraphBackend": "socialgraph.graph.base",
    "RelationshipStore": "socialgraph.graph.base",
    "InMemoryBackend": "socialgraph.graph.memory",
    "InMemoryEntityStore": "socialgraph.graph.memory",
    "InMemoryRelationshipStore": "socialgraph.graph.memory",
    "Neo4jBackend": "socialgraph.graph.store",
    "Neo4jEntityStore": "socialgraph.graph.store",
    "Neo4jRelationshipStore": "socialgraph.graph.store",
    "SCHEMA_STATEMENTS": "socialgraph.graph.schema",
    "init_schema": "socialgraph.graph.schema",
    "load_bootstrap_file": "socialgraph.graph.schema",
    "split_statements": "socialgraph.graph.schema",
}


def __getattr__(name: str):
    module_name = _EXPORT_TO_MODULE.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(module_name)
    return getattr(module, name)
