"""Read-only query engine over the entity and relationship stores.

Recommendations are one-hop: candidates share an attribute value with the
subject and are neither the subject nor already one of its friends.
"""

from __future__ import annotations

from socialgraph.graph.base import EntityStore
from socialgraph.graph.base import RelationshipStore
from socialgraph.models.nodes import Person
from socialgraph.models.nodes import require_attribute
from socialgraph.models.schemas import GraphStats


class QueryEngine:
    """Derived views: listings, recommendations and aggregate statistics."""

    def __init__(self, people: EntityStore, friendships: RelationshipStore) -> None:
        self._people = people
        self._friendships = friendships

    async def list_people(self) -> list[Person]:
        return await self._people.list_all()

    async def find_person(self, name: str) -> Person | None:
        return await self._people.get(name)

    async def list_friends(self, name: str) -> list[Person]:
        return await self._friendships.list_neighbors(name)

    async def recommend_by_city(self, name: str) -> list[Person]:
        """People living in the same city as *name* who are not yet friends."""
        return await self.recommend_by(name, "city")

    async def recommend_by_hobby(self, name: str) -> list[Person]:
        """People sharing the hobby of *name* who are not yet friends."""
        return await self.recommend_by(name, "hobby")

    async def recommend_by(self, name: str, attribute: str) -> list[Person]:
        """Return non-friends sharing *attribute* with *name*, sorted by name.

        An unknown person, or one whose attribute is unset, gets no
        recommendations.
        """
        require_attribute(attribute)
        person = await self._people.get(name)
        if person is None:
            return []
        value = getattr(person, attribute)
        if value is None:
            return []

        candidates = await self._people.find_by_attribute(attribute, value)
        friends = {friend.name for friend in await self._friendships.list_neighbors(name)}
        return [
            candidate
            for candidate in candidates
            if candidate.name != name and candidate.name not in friends
        ]

    async def stats(self) -> GraphStats:
        """Count people and friendships.

        The average divides undirected edges by people, i.e. half the mean
        degree.
        """
        total_people = await self._people.count()
        total_friendships = await self._friendships.count()
        average = total_friendships / total_people if total_people > 0 else 0.0
        return GraphStats(
            total_people=total_people,
            total_friendships=total_friendships,
            average_friends_per_person=float(average),
        )
