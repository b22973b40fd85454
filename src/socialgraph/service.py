"""Graph service: the operation set consumed by driving shells.

``GraphService`` owns a backend (Neo4j or in-memory) and composes its two
stores with the ``QueryEngine``.  Each operation is atomic with respect to
its own mutations; nothing spans several calls.  Every call is timed under
``graph.<operation>`` and effective mutations are audited when an
``AuditLogger`` is attached.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from socialgraph.audit import AuditEventType
from socialgraph.audit import AuditLogger
from socialgraph.config import BootstrapConfig
from socialgraph.config import GraphServiceConfig
from socialgraph.config import Neo4jConfig
from socialgraph.engine import QueryEngine
from socialgraph.errors import BackendError
from socialgraph.errors import NotFoundError
from socialgraph.errors import SocialGraphError
from socialgraph.graph.base import GraphBackend
from socialgraph.graph.memory import InMemoryBackend
from socialgraph.graph.schema import load_bootstrap_file
from socialgraph.graph.schema import SCHEMA_STATEMENTS
from socialgraph.graph.store import Neo4jBackend
from socialgraph.models.nodes import Person
from socialgraph.models.nodes import require_name
from socialgraph.models.schemas import BootstrapReport
from socialgraph.models.schemas import GraphStats
from socialgraph.models.schemas import StatementFailure
from socialgraph.observability import track_latency

logger = logging.getLogger(__name__)


class GraphService:
    """Facade over the entity store, relationship store and query engine."""

    def __init__(
        self,
        backend: GraphBackend,
        *,
        config: GraphServiceConfig | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._backend = backend
        self._config = config or GraphServiceConfig()
        self._audit = audit_logger
        self._queries = QueryEngine(backend.people, backend.friendships)
        self._bootstrap_report: BootstrapReport | None = None

    @classmethod
    def in_memory(cls, **kwargs) -> GraphService:
        return cls(InMemoryBackend(), **kwargs)

    @classmethod
    async def connect(cls, neo4j_config: Neo4jConfig, **kwargs) -> GraphService:
        """Open a Neo4j-backed service, failing fast if the server is unreachable."""
        backend = Neo4jBackend.from_config(neo4j_config)
        try:
            await backend.verify_connectivity()
        except BackendError:
            await backend.close()
            raise
        return cls(backend, **kwargs)

    @property
    def backend(self) -> GraphBackend:
        return self._backend

    @property
    def bootstrap_report(self) -> BootstrapReport | None:
        return self._bootstrap_report

    async def close(self) -> None:
        await self._backend.close()

    # ----- People -----

    async def add_person(
        self, name: str, city: str | None = None, hobby: str | None = None
    ) -> Person:
        """Create *name*, or replace its city and hobby if it already exists."""
        with track_latency("graph.add_person"):
            person = await self._backend.people.upsert(name, city, hobby)
            await self._audit_event(
                AuditEventType.PERSON_UPSERTED, name=name, city=city, hobby=hobby
            )
            return person

    async def list_people(self) -> list[Person]:
        with track_latency("graph.list_people"):
            return await self._queries.list_people()

    async def find_person(self, name: str) -> Person | None:
        with track_latency("graph.find_person"):
            return await self._queries.find_person(name)

    async def require_person(self, name: str) -> Person:
        """Strict lookup: raise ``NotFoundError`` instead of returning ``None``."""
        person = await self.find_person(name)
        if person is None:
            raise NotFoundError(name)
        return person

    async def delete_person(self, name: str) -> bool:
        """Delete *name* together with all of its friendships."""
        with track_latency("graph.delete_person"):
            deleted = await self._backend.people.delete(name)
            if deleted:
                await self._audit_event(AuditEventType.PERSON_DELETED, name=name)
            else:
                logger.debug("delete_person: %r does not exist", name)
            return deleted

    # ----- Friendships -----

    async def create_friendship(self, a: str, b: str) -> bool:
        """Link *a* and *b*; ``False`` means nothing changed.

        Nothing changes when the pair is already linked, when ``a == b``, or
        when either person is missing.  With ``strict_friendships`` a blank
        or missing endpoint raises instead.
        """
        with track_latency("graph.create_friendship"):
            if self._config.strict_friendships:
                require_name(a, field_name="first name")
                require_name(b, field_name="second name")
            created = await self._backend.friendships.create(a, b)
            if created:
                await self._audit_event(AuditEventType.FRIENDSHIP_CREATED, a=a, b=b)
                return True
            if self._config.strict_friendships:
                for name in (a, b):
                    if await self._backend.people.get(name) is None:
                        raise NotFoundError(name)
            logger.debug("create_friendship(%r, %r): no changes", a, b)
            return False

    async def list_friends(self, name: str) -> list[Person]:
        with track_latency("graph.list_friends"):
            return await self._queries.list_friends(name)

    async def delete_friendship(self, a: str, b: str) -> int:
        """Remove the friendship between *a* and *b*; return the edge count removed."""
        with track_latency("graph.delete_friendship"):
            removed = await self._backend.friendships.delete(a, b)
            if removed:
                await self._audit_event(
                    AuditEventType.FRIENDSHIP_DELETED, a=a, b=b, removed=removed
                )
            return removed

    # ----- Queries -----

    async def recommend_by_city(self, name: str) -> list[Person]:
        with track_latency("graph.recommend_by_city"):
            return await self._queries.recommend_by_city(name)

    async def recommend_by_hobby(self, name: str) -> list[Person]:
        with track_latency("graph.recommend_by_hobby"):
            return await self._queries.recommend_by_hobby(name)

    async def stats(self) -> GraphStats:
        with track_latency("graph.stats"):
            return await self._queries.stats()

    # ----- Bootstrap -----

    async def bootstrap(
        self,
        statements: Iterable[str] = (),
        *,
        config: BootstrapConfig | None = None,
    ) -> BootstrapReport:
        """Apply the startup batch once.

        Statements run in order, each on its own.  With
        ``config.stop_on_error`` the first failure raises ``BackendError``;
        otherwise failures are logged, collected in the report and the
        remaining statements still run.
        """
        if self._bootstrap_report is not None:
            raise RuntimeError("Bootstrap has already been applied to this service.")
        cfg = config or BootstrapConfig()
        batch = list(SCHEMA_STATEMENTS) if cfg.init_schema else []
        batch.extend(statements)

        report = BootstrapReport(total=len(batch))
        with track_latency("graph.bootstrap"):
            for index, statement in enumerate(batch):
                try:
                    await self._backend.run_statement(statement)
                except SocialGraphError as exc:
                    if cfg.stop_on_error:
                        raise BackendError(
                            f"Bootstrap statement {index} failed: {exc}"
                        ) from exc
                    logger.warning("Bootstrap statement %d failed: %s", index, exc)
                    report.failures.append(
                        StatementFailure(
                            index=index, statement=statement, message=str(exc)
                        )
                    )
                    continue
                report.executed += 1

        logger.info(
            "Bootstrap applied: %d/%d statement(s) executed",
            report.executed,
            report.total,
        )
        self._bootstrap_report = report
        await self._audit_event(
            AuditEventType.BOOTSTRAP_RUN,
            total=report.total,
            executed=report.executed,
            failed=len(report.failures),
        )
        return report

    async def bootstrap_from_file(
        self, config: BootstrapConfig | None = None
    ) -> BootstrapReport:
        """Load ``config.file_path`` and apply it; a missing file applies the schema only."""
        cfg = config or BootstrapConfig()
        path = Path(cfg.file_path)
        statements: list[str] = []
        if path.exists():
            statements = load_bootstrap_file(path)
        else:
            logger.info("Bootstrap file %s not found; applying schema only", path)
        return await self.bootstrap(statements, config=cfg)

    # ----- Internal helpers -----

    async def _audit_event(self, event_type: AuditEventType, **payload: object) -> None:
        if self._audit is not None:
            await self._audit.record(event_type, **payload)
