"""Tests for recommendations and statistics in the query engine."""

from __future__ import annotations

import pytest

from socialgraph.engine import QueryEngine


@pytest.fixture()
def engine(people, friendships):
    return QueryEngine(people, friendships)


@pytest.fixture()
async def town(people):
    await people.upsert("Ana", "Rosario", "lectura")
    await people.upsert("Beto", "Rosario", "lectura")
    await people.upsert("Caro", "Cordoba", "ajedrez")
    await people.upsert("Dani", "Rosario", "ajedrez")
    await people.upsert("Eva", "Cordoba", "lectura")


def _names(rows) -> list[str]:
    return [p.name for p in rows]


class TestRecommendByCity:
    async def test_same_city_excluding_self(self, engine, town):
        assert _names(await engine.recommend_by_city("Ana")) == ["Beto", "Dani"]

    async def test_excludes_existing_friends_in_either_direction(
        self, engine, friendships, town
    ):
        await friendships.create("Dani", "Ana")
        assert _names(await engine.recommend_by_city("Ana")) == ["Beto"]
        assert _names(await engine.recommend_by_city("Dani")) == ["Beto"]

    async def test_unknown_person_gets_nothing(self, engine, town):
        assert await engine.recommend_by_city("Ghost") == []

    async def test_person_without_city_gets_nothing(self, engine, people, town):
        await people.upsert("Nomad", None, "lectura")
        assert await engine.recommend_by_city("Nomad") == []

    async def test_never_recommends_other_cities(self, engine, town):
        for person in await engine.recommend_by_city("Caro"):
            assert person.city == "Cordoba"


class TestRecommendByHobby:
    async def test_same_hobby(self, engine, town):
        assert _names(await engine.recommend_by_hobby("Ana")) == ["Beto", "Eva"]

    async def test_excludes_friends(self, engine, friendships, town):
        await friendships.create("Ana", "Eva")
        assert _names(await engine.recommend_by_hobby("Ana")) == ["Beto"]

    async def test_generic_entry_point_rejects_unknown_attribute(self, engine):
        with pytest.raises(ValueError):
            await engine.recommend_by("Ana", "age")


class TestStats:
    async def test_empty_graph(self, engine):
        stats = await engine.stats()
        assert stats.total_people == 0
        assert stats.total_friendships == 0
        assert stats.average_friends_per_person == 0.0

    async def test_three_people_two_edges(self, engine, people, friendships):
        for name in ("Ana", "Beto", "Caro"):
            await people.upsert(name, "Rosario", "lectura")
        await friendships.create("Ana", "Beto")
        await friendships.create("Caro", "Beto")
        stats = await engine.stats()
        assert stats.total_people == 3
        assert stats.total_friendships == 2
        assert stats.average_friends_per_person == pytest.approx(2 / 3)

    async def test_average_is_half_the_mean_degree(self, engine, people, friendships):
        await people.upsert("Ana")
        await people.upsert("Beto")
        await friendships.create("Ana", "Beto")
        stats = await engine.stats()
        mean_degree = (
            await friendships.degree_of("Ana") + await friendships.degree_of("Beto")
        ) / 2
        assert stats.average_friends_per_person == 0.5
        assert stats.average_friends_per_person == mean_degree / 2

    async def test_list_views(self, engine, friendships, town):
        await friendships.create("Ana", "Caro")
        assert _names(await engine.list_people()) == ["Ana", "Beto", "Caro", "Dani", "Eva"]
        assert _names(await engine.list_friends("Caro")) == ["Ana"]
        assert (await engine.find_person("Eva")).city == "Cordoba"
