"""
Shared fixtures: movie factories, a scripted metrics policy and dataset files.
"""

import json
from typing import Iterable, List

import pytest

from reelbase.catalog import CatalogIndex
from reelbase.metrics import MetricsPolicy
from reelbase.models import Genre, Movie, RawCatalogEntry, SyntheticMetrics


class ScriptedMetrics(MetricsPolicy):
	"""Hands out popularity/vote values from lists, one per generated entry."""

	def __init__(self, popularity: Iterable[float] = (), vote_average: Iterable[float] = ()):
		self._popularity = list(popularity)
		self._vote_average = list(vote_average)
		self.calls = 0

	def generate(self, entry: RawCatalogEntry) -> SyntheticMetrics:
		i = self.calls
		self.calls += 1
		return SyntheticMetrics(
			vote_average=self._vote_average[i] if i < len(self._vote_average) else 5.0,
			vote_count=100,
			popularity=self._popularity[i] if i < len(self._popularity) else 50.0,
			runtime=90,
		)


@pytest.fixture
def scripted_metrics():
	return ScriptedMetrics


@pytest.fixture
def make_movie():
	def _make(movie_id: int, popularity: float = 10.0, vote_average: float = 5.0,
			genre_ids=(), title=None, overview=''):
		return Movie(
			id=movie_id,
			title=title if title is not None else f"Movie {movie_id}",
			overview=overview,
			poster_path=f"https://img.example/{movie_id}.jpg",
			release_date="2000-01-01",
			vote_average=vote_average,
			vote_count=10,
			popularity=popularity,
			runtime=90,
			genre_ids=tuple(genre_ids),
			genres=tuple(Genre(id=g, name=f"Genre {g}") for g in genre_ids),
		)
	return _make


@pytest.fixture
def large_catalog(make_movie) -> CatalogIndex:
	"""45 movies, popularity and rating spread so there are three pages."""
	movies = [
		make_movie(
			i,
			popularity=float((i * 37) % 100),
			vote_average=float((i * 13) % 10) + 0.1 * (i % 3),
			genre_ids=(1 + i % 3,) if i % 5 else (1, 2),
		)
		for i in range(1, 46)
	]
	return CatalogIndex(movies)


@pytest.fixture
def example_entries() -> List[RawCatalogEntry]:
	"""The three-entry example: A and C are valid, B has no poster."""
	return [
		RawCatalogEntry(title="A", year=2000, genres=["Drama"], thumbnail="x"),
		RawCatalogEntry(title="B", year=2001, genres=[], thumbnail=None),
		RawCatalogEntry(title="C", year=1999, genres=["Drama", "Comedy"], thumbnail="y"),
	]


@pytest.fixture
def dataset_file(tmp_path):
	"""Write rows to a dataset file (JSON array by default) and return its path."""
	def _write(rows, name="movies.json"):
		path = tmp_path / name
		if name.endswith(".jsonl"):
			path.write_text("\n".join(json.dumps(r) for r in rows) + "\n", encoding="utf-8")
		else:
			path.write_text(json.dumps(rows), encoding="utf-8")
		return path
	return _write


@pytest.fixture
def sample_rows():
	return [
		{"title": "A", "year": 2000, "genres": ["Drama"], "thumbnail": "x", "extract": "a harbor story", "cast": ["Ann", "Bo"]},
		{"title": "B", "year": 2001, "genres": [], "extract": "no poster"},
		{"title": "C", "year": 1999, "genres": ["Drama", "Comedy"], "thumbnail": "y", "extract": "Kitchen rivals"},
	]
