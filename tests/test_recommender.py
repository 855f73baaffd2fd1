"""
Tests for Recommender: genre preference, exclusions and the popularity fallback.
"""

import pytest

from reelbase.catalog import CatalogIndex
from reelbase.query_engine import QueryEngine
from reelbase.recommender import Recommender


@pytest.fixture
def recommender(large_catalog):
	return Recommender(large_catalog)


def test_no_preferences_falls_back_to_popularity(recommender, large_catalog):
	excluded = {m.id for m in QueryEngine(large_catalog).popular(1)[:5]}
	ranked = [m for p in (1, 2, 3) for m in QueryEngine(large_catalog).popular(p)]
	expected = [m.id for m in ranked if m.id not in excluded]

	for page in (1, 2, 3):
		got = [m.id for m in recommender.recommend(set(), excluded, page)]
		assert got == expected[(page - 1) * 20:page * 20]


def test_no_preferences_no_exclusions_equals_popular(recommender, large_catalog):
	engine = QueryEngine(large_catalog)
	for page in (1, 2, 3, 4):
		assert recommender.recommend(None, None, page) == engine.popular(page)


def test_preferred_genre_filters_and_sorts_by_popularity(recommender):
	movies = [m for p in (1, 2) for m in recommender.recommend({2}, set(), p)]
	assert movies
	assert all(2 in m.genre_ids for m in movies)
	pops = [m.popularity for m in movies]
	assert pops == sorted(pops, reverse=True)


def test_any_overlap_not_all_genres(make_movie):
	rec = Recommender(CatalogIndex([
		make_movie(1, popularity=1.0, genre_ids=(1,)),
		make_movie(2, popularity=3.0, genre_ids=(2, 3)),
		make_movie(3, popularity=2.0, genre_ids=(4,)),
	]))
	assert [m.id for m in rec.recommend({1, 2})] == [2, 1]


def test_excluded_movies_never_come_back(recommender):
	excluded = {1, 2, 3, 10, 20}
	movies = [m for p in (1, 2, 3) for m in recommender.recommend({1, 2, 3}, excluded, p)]
	assert not excluded & {m.id for m in movies}
	assert len(movies) == 40


def test_out_of_range_page_is_empty(recommender):
	assert recommender.recommend({1}, set(), 50) == []
	assert recommender.recommend(set(), set(), 0) == []
