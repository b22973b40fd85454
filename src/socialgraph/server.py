"""SocialGraph MCP server: the graph service operations as FastMCP tools.

Call ``configure(...)`` before using the tools.  Core errors are returned
as ``status="error"`` payloads carrying an ``error_code``; they never abort
the server.
"""

from __future__ import annotations

from fastmcp import FastMCP

from socialgraph.audit import AuditLogger
from socialgraph.config import AuditConfig
from socialgraph.config import BootstrapConfig
from socialgraph.config import GraphServiceConfig
from socialgraph.config import Neo4jConfig
from socialgraph.errors import BackendError
from socialgraph.errors import NotFoundError
from socialgraph.errors import SocialGraphError
from socialgraph.errors import ValidationError
from socialgraph.models.nodes import Person
from socialgraph.models.schemas import MutationResult
from socialgraph.models.schemas import PeopleResult
from socialgraph.models.schemas import PersonResult
from socialgraph.models.schemas import StatsResult
from socialgraph.service import GraphService

mcp = FastMCP("SocialGraph")

# ---------------------------------------------------------------------------
# Service instance (set via configure())
# ---------------------------------------------------------------------------

_service: GraphService | None = None


async def configure(
    *,
    service: GraphService | None = None,
    neo4j_config: Neo4jConfig | None = None,
    use_memory: bool = False,
    service_config: GraphServiceConfig | None = None,
    audit_config: AuditConfig | None = None,
    bootstrap_config: BootstrapConfig | None = None,
) -> GraphService:
    """Initialize the graph service used by the tools.

    An explicit *service* wins; otherwise an in-memory or Neo4j-backed one
    is built.  With *bootstrap_config* the startup batch is applied before
    returning.
    """
    global _service
    await shutdown()

    owned = service is None
    if service is None:
        audit_logger = AuditLogger(audit_config) if audit_config else None
        kwargs = {"config": service_config, "audit_logger": audit_logger}
        if use_memory:
            service = GraphService.in_memory(**kwargs)
        else:
            service = await GraphService.connect(
                neo4j_config or Neo4jConfig.from_env(), **kwargs
            )
    if bootstrap_config is not None:
        try:
            await service.bootstrap_from_file(bootstrap_config)
        except BaseException:
            # A caller-supplied service stays open; the caller owns it.
            if owned:
                await service.close()
            raise

    _service = service
    return service


async def shutdown() -> None:
    """Close the backend and forget the configured service."""
    global _service
    if _service is not None:
        await _service.close()
        _service = None


def _get_service() -> GraphService:
    if _service is None:
        raise RuntimeError("Graph service not configured. Call configure() first.")
    return _service


_ERROR_CODES: list[tuple[type[SocialGraphError], str]] = [
    (ValidationError, "validation_error"),
    (NotFoundError, "not_found"),
    (BackendError, "backend_error"),
]


def _error_fields(exc: SocialGraphError) -> dict:
    code = next(
        (code for cls, code in _ERROR_CODES if isinstance(exc, cls)), "graph_error"
    )
    return {"status": "error", "error_code": code, "message": str(exc)}


def _people(rows: list[Person]) -> PeopleResult:
    return PeopleResult(people=rows, count=len(rows))


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool
async def add_person(
    name: str, city: str | None = None, hobby: str | None = None
) -> PersonResult:
    """Register a person, or overwrite the city and hobby of an existing one.

    Args:
        name: Unique, case-sensitive person name.
        city: City the person lives in.
        hobby: Main hobby of the person.
    """
    try:
        person = await _get_service().add_person(name, city, hobby)
    except SocialGraphError as exc:
        return PersonResult(**_error_fields(exc))
    return PersonResult(person=person)


@mcp.tool
async def list_people() -> PeopleResult:
    """List every registered person, sorted by name."""
    try:
        return _people(await _get_service().list_people())
    except SocialGraphError as exc:
        return PeopleResult(**_error_fields(exc))


@mcp.tool
async def find_person(name: str) -> PersonResult:
    """Look up a person by exact name."""
    try:
        person = await _get_service().find_person(name)
    except SocialGraphError as exc:
        return PersonResult(**_error_fields(exc))
    if person is None:
        return PersonResult(status="not_found", message=f"No person named {name!r}.")
    return PersonResult(person=person)


@mcp.tool
async def delete_person(name: str) -> MutationResult:
    """Delete a person and all of their friendships."""
    try:
        deleted = await _get_service().delete_person(name)
    except SocialGraphError as exc:
        return MutationResult(**_error_fields(exc))
    if not deleted:
        return MutationResult(status="unchanged")
    return MutationResult(changed=1)


@mcp.tool
async def create_friendship(a: str, b: str) -> MutationResult:
    """Make two existing people friends (the relation is symmetric)."""
    try:
        created = await _get_service().create_friendship(a, b)
    except SocialGraphError as exc:
        return MutationResult(**_error_fields(exc))
    if not created:
        return MutationResult(
            status="unchanged",
            message="Already friends, same person, or unknown name.",
        )
    return MutationResult(changed=1)


@mcp.tool
async def list_friends(name: str) -> PeopleResult:
    """List the friends of a person, sorted by name."""
    try:
        return _people(await _get_service().list_friends(name))
    except SocialGraphError as exc:
        return PeopleResult(**_error_fields(exc))


@mcp.tool
async def delete_friendship(a: str, b: str) -> MutationResult:
    """Remove the friendship between two people, in either order."""
    try:
        removed = await _get_service().delete_friendship(a, b)
    except SocialGraphError as exc:
        return MutationResult(**_error_fields(exc))
    return MutationResult(status="ok" if removed else "unchanged", changed=removed)


@mcp.tool
async def recommend_by_city(name: str) -> PeopleResult:
    """Suggest people from the same city who are not friends yet."""
    try:
        return _people(await _get_service().recommend_by_city(name))
    except SocialGraphError as exc:
        return PeopleResult(**_error_fields(exc))


@mcp.tool
async def recommend_by_hobby(name: str) -> PeopleResult:
    """Suggest people with the same hobby who are not friends yet."""
    try:
        return _people(await _get_service().recommend_by_hobby(name))
    except SocialGraphError as exc:
        return PeopleResult(**_error_fields(exc))


@mcp.tool
async def stats() -> StatsResult:
    """Total people, total friendships and average friends per person."""
    try:
        return StatsResult(stats=await _get_service().stats())
    except SocialGraphError as exc:
        return StatsResult(**_error_fields(exc))
