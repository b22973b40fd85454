"""Application configuration dataclasses.

Frozen dataclasses with sensible defaults for each subsystem.  Only the
Neo4j connection settings are read from the environment (and an optional
``.env`` file); everything else is overridden at construction time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Neo4jConfig:
    """Connection settings for the Neo4j backend."""

    uri: str = "bolt://localhost:7687"
    user: str = "neo4j"
    password: str = "password123"
    database: str | None = None

    @property
    def auth(self) -> tuple[str, str] | None:
        if not self.user:
            return None
        return (self.user, self.password)

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> Neo4jConfig:
        """Build a config from ``NEO4J_*`` variables.

        A ``.env`` file is loaded first; variables already present in the
        process environment stay authoritative.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)
        defaults = cls()
        return cls(
            uri=os.getenv("NEO4J_URI", defaults.uri),
            user=os.getenv("NEO4J_USER", defaults.user),
            password=os.getenv("NEO4J_PASSWORD", defaults.password),
            database=os.getenv("NEO4J_DATABASE") or defaults.database,
        )


@dataclass(frozen=True)
class BootstrapConfig:
    """How the one-time startup batch is loaded and applied."""

    file_path: str = "cypher_bootstrap.cypher"
    # Abort on the first failing statement instead of recording and continuing.
    stop_on_error: bool = True
    # Apply the built-in Person constraints before the file statements.
    init_schema: bool = True


@dataclass(frozen=True)
class GraphServiceConfig:
    """Behaviour switches for the graph service facade."""

    # Raise NotFoundError instead of returning False when a friendship
    # endpoint does not exist.
    strict_friendships: bool = False


@dataclass(frozen=True)
class AuditConfig:
    """Settings for the JSONL audit logger."""

    file_path: str = "socialgraph_audit.jsonl"
    enabled: bool = True
