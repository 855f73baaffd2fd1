"""
Tests for QueryEngine listings: ranking order, pagination, search, genres and similarity.
"""

import pytest

from reelbase.catalog import CatalogIndex
from reelbase.query_engine import QueryEngine


@pytest.fixture
def engine(large_catalog):
	return QueryEngine(large_catalog)


def test_popular_pages_are_bounded_and_disjoint(engine):
	pages = [engine.popular(p) for p in (1, 2, 3)]
	assert [len(p) for p in pages] == [20, 20, 5]
	ids = [m.id for page in pages for m in page]
	assert len(ids) == len(set(ids)) == 45
	assert engine.popular(4) == []


def test_popular_is_non_increasing(engine):
	movies = [m for p in (1, 2, 3) for m in engine.popular(p)]
	pops = [m.popularity for m in movies]
	assert pops == sorted(pops, reverse=True)


def test_top_rated_is_non_increasing(engine):
	movies = [m for p in (1, 2, 3) for m in engine.top_rated(p)]
	ratings = [m.vote_average for m in movies]
	assert ratings == sorted(ratings, reverse=True)
	assert len(movies) == 45


def test_equal_scores_keep_catalog_order(make_movie):
	engine = QueryEngine(CatalogIndex([
		make_movie(4, popularity=5.0, vote_average=7.0),
		make_movie(2, popularity=9.0, vote_average=7.0),
		make_movie(7, popularity=5.0, vote_average=7.0),
		make_movie(1, popularity=5.0, vote_average=8.0),
	]))
	assert [m.id for m in engine.popular()] == [2, 4, 7, 1]
	assert [m.id for m in engine.top_rated()] == [1, 4, 2, 7]


def test_ties_across_a_page_boundary_do_not_repeat(make_movie):
	engine = QueryEngine(CatalogIndex([make_movie(i, popularity=1.0) for i in range(1, 31)]))
	first, second = engine.popular(1), engine.popular(2)
	assert [m.id for m in first] == list(range(1, 21))
	assert [m.id for m in second] == list(range(21, 31))


def test_blank_search_returns_nothing(engine):
	for page in (1, 2):
		assert engine.search("", page) == []
		assert engine.search("   ", page) == []


def test_search_matches_title_or_overview_case_insensitively(make_movie):
	engine = QueryEngine(CatalogIndex([
		make_movie(1, title="The Long Harbor", overview="a fisherman"),
		make_movie(2, title="Signal Lost", overview="Harbor lights at night"),
		make_movie(3, title="Red Mesa", overview="a western"),
		make_movie(4, title="Paper Kites", overview=""),
	]))
	assert [m.id for m in engine.search("harbor")] == [1, 2]
	assert [m.id for m in engine.search("HARBOR")] == [1, 2]
	assert [m.id for m in engine.search("Long Har")] == [1]
	assert engine.search("zzz") == []


def test_search_results_contain_the_query(engine):
	results = engine.search("movie 1")
	assert results
	assert all("movie 1" in m.title.lower() or "movie 1" in m.overview.lower() for m in results)


def test_search_paginates_matches(make_movie):
	engine = QueryEngine(CatalogIndex([make_movie(i, title=f"Kite {i}") for i in range(1, 26)]))
	assert len(engine.search("kite", 1)) == 20
	assert [m.id for m in engine.search("kite", 2)] == list(range(21, 26))


def test_by_genre_filters_and_keeps_catalog_order(engine, large_catalog):
	for genre_id in (1, 2, 3):
		movies = [m for p in (1, 2) for m in engine.by_genre(genre_id, p)]
		assert all(genre_id in m.genre_ids for m in movies)
		assert [m.id for m in movies] == [m.id for m in large_catalog if genre_id in m.genre_ids]


def test_multi_genre_movie_appears_under_each_genre(make_movie):
	engine = QueryEngine(CatalogIndex([make_movie(1, genre_ids=(1, 2)), make_movie(2, genre_ids=(2,))]))
	assert [m.id for m in engine.by_genre(1)] == [1]
	assert [m.id for m in engine.by_genre(2)] == [1, 2]
	assert engine.by_genre(3) == []


def test_similar_ranks_by_shared_genres(make_movie):
	engine = QueryEngine(CatalogIndex([
		make_movie(1, genre_ids=(1, 2)),  # X
		make_movie(2, genre_ids=(1,)),  # Y
		make_movie(3, genre_ids=(3,)),  # nothing shared
		make_movie(4, genre_ids=(1, 2)),  # Z
	]))
	assert [m.id for m in engine.similar(1)] == [4, 2]


def test_similar_excludes_itself_and_caps_at_twenty(engine):
	results = engine.similar(5)
	assert 0 < len(results) <= 20
	assert 5 not in [m.id for m in results]


def test_similar_for_unknown_movie_is_empty(engine):
	assert engine.similar(999) == []


def test_similar_ties_keep_catalog_order(make_movie):
	engine = QueryEngine(CatalogIndex([make_movie(i, genre_ids=(1,)) for i in range(1, 30)]))
	assert [m.id for m in engine.similar(1)] == list(range(2, 22))


def test_details(engine):
	assert engine.details(1).id == 1
	assert engine.details(999) is None
