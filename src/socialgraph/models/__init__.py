"""Models domain: Person, Friendship and result schemas."""

from __future__ import annotations

from socialgraph.models.nodes import Person
from socialgraph.models.nodes import PERSON_ATTRIBUTES
from socialgraph.models.nodes import require_attribute
from socialgraph.models.nodes import require_name
from socialgraph.models.relations import canonical_pair
from socialgraph.models.relations import Friendship
from socialgraph.models.schemas import BootstrapReport
from socialgraph.models.schemas import GraphStats
from socialgraph.models.schemas import MutationResult
from socialgraph.models.schemas import PeopleResult
from socialgraph.models.schemas import PersonResult
from socialgraph.models.schemas import StatementFailure
from socialgraph.models.schemas import StatsResult

__all__ = [
    # Nodes
    "PERSON_ATTRIBUTES",
    "Person",
    "require_attribute",
    "require_name",
    # Relations
    "Friendship",
    "canonical_pair",
    # Schemas
    "BootstrapReport",
    "GraphStats",
    "MutationResult",
    "PeopleResult",
    "PersonResult",
    "StatementFailure",
    "StatsResult",
]
