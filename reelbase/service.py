"""
Service facade.
The single entry point the HTTP layer talks to. Bundles the genre registry, catalog,
query engine and recommender built from one dataset load into a snapshot, and swaps
whole snapshots on reload so a request never sees a half-built catalog.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from loguru import logger

from .catalog import CatalogIndex
from .data_loader import DataLoader
from .genres import GenreRegistry
from .metrics import MetricsPolicy, RandomMetricsPolicy
from .models import Genre, Movie, RawCatalogEntry
from .query_engine import QueryEngine
from .recommender import Recommender


@dataclass(frozen=True)
class CatalogSnapshot:
	genres: GenreRegistry
	catalog: CatalogIndex
	queries: QueryEngine
	recommender: Recommender

	@classmethod
	def build(cls, genres: GenreRegistry, catalog: CatalogIndex) -> 'CatalogSnapshot':
		return cls(
			genres=genres,
			catalog=catalog,
			queries=QueryEngine(catalog),
			recommender=Recommender(catalog),
		)


class MovieService:
	"""
	Read-only catalog operations exposed to the web layer.
	Every method reads the current snapshot once, so concurrent calls need no locking.
	"""

	def __init__(self, snapshot: CatalogSnapshot, loader: Optional[DataLoader] = None):
		self._snapshot = snapshot
		self._loader = loader or DataLoader()

	@classmethod
	def from_file(
		cls,
		filepath: Union[str, Path],
		seed: Optional[int] = None,
		metrics_policy: Optional[MetricsPolicy] = None,
	) -> 'MovieService':
		"""Load a dataset file. Raises DatasetError when the file is unusable."""
		loader = DataLoader(metrics_policy or RandomMetricsPolicy(seed))
		genres, catalog = loader.load_catalog(str(filepath))
		logger.info(f"[Service] Serving {len(catalog)} movies from {filepath}")
		return cls(CatalogSnapshot.build(genres, catalog), loader)

	@classmethod
	def from_entries(
		cls,
		entries: Iterable[RawCatalogEntry],
		seed: Optional[int] = None,
		metrics_policy: Optional[MetricsPolicy] = None,
	) -> 'MovieService':
		"""Build from entries already in memory (e.g. fixtures)."""
		loader = DataLoader(metrics_policy or RandomMetricsPolicy(seed))
		genres, catalog = loader.load(entries)
		return cls(CatalogSnapshot.build(genres, catalog), loader)

	def reload(self, filepath: Union[str, Path]):
		"""
		Rebuild from disk and swap in the result. On DatasetError the current
		snapshot stays in place and the error propagates.
		"""
		genres, catalog = self._loader.load_catalog(str(filepath))
		self._snapshot = CatalogSnapshot.build(genres, catalog)  # single reference swap
		logger.info(f"[Service] Reloaded catalog: {len(catalog)} movies")

	@property
	def snapshot(self) -> CatalogSnapshot:
		return self._snapshot

	def fetch_genres(self) -> List[Genre]:
		return self._snapshot.genres.all()

	def fetch_popular_movies(self, page: int = 1) -> List[Movie]:
		return self._snapshot.queries.popular(page)

	def fetch_top_rated_movies(self, page: int = 1) -> List[Movie]:
		return self._snapshot.queries.top_rated(page)

	def search_movies(self, query: str, page: int = 1) -> List[Movie]:
		return self._snapshot.queries.search(query, page)

	def fetch_movies_by_genre(self, genre_id: int, page: int = 1) -> List[Movie]:
		return self._snapshot.queries.by_genre(genre_id, page)

	def fetch_movie_details(self, movie_id: int) -> Optional[Movie]:
		return self._snapshot.queries.details(movie_id)

	def fetch_similar_movies(self, movie_id: int) -> List[Movie]:
		return self._snapshot.queries.similar(movie_id)

	def fetch_recommendations(
		self,
		preferred_genre_ids: Optional[Iterable[int]] = None,
		exclude_movie_ids: Optional[Iterable[int]] = None,
		page: int = 1,
	) -> List[Movie]:
		return self._snapshot.recommender.recommend(preferred_genre_ids, exclude_movie_ids, page)
