"""
Catalog index module.
Holds the valid movies in dataset order and answers id lookups. Ranking,
filtering and pagination live in the query engine; this is a plain fact store.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from loguru import logger

from .models import Movie


class CatalogIndex:
	"""
	Read-only, ordered collection of valid movies.
	Built once; a reload creates a new index instead of mutating this one.
	"""

	def __init__(self, movies: Iterable[Movie]):
		self._movies: Tuple[Movie, ...] = tuple(movies)  # catalog order
		self._by_id: Dict[int, Movie] = {}  # id -> movie

		genre_lists: Dict[int, List[int]] = {}
		for movie in self._movies:
			if movie.id in self._by_id:
				raise ValueError(f"Duplicate movie id in catalog: {movie.id}")
			self._by_id[movie.id] = movie
			for genre_id in dict.fromkeys(movie.genre_ids):  # dedupe, keep order
				genre_lists.setdefault(genre_id, []).append(movie.id)
		self._by_genre: Dict[int, Tuple[int, ...]] = {  # genre id -> movie ids in catalog order
			genre_id: tuple(ids) for genre_id, ids in genre_lists.items()
		}

		logger.debug(f"[Catalog] Indexed {len(self._movies)} movies across {len(self._by_genre)} genres")

	def all(self) -> List[Movie]:
		"""Every movie in catalog order. Returns a new list each call."""
		return list(self._movies)

	def by_id(self, movie_id: int) -> Optional[Movie]:
		"""Return the movie with this id, or None if it is unknown or was filtered out."""
		return self._by_id.get(movie_id)

	def ids_for_genre(self, genre_id: int) -> Tuple[int, ...]:
		"""Ids of movies tagged with a genre, in catalog order."""
		return self._by_genre.get(genre_id, ())

	def __len__(self) -> int:
		return len(self._movies)

	def __iter__(self) -> Iterator[Movie]:
		return iter(self._movies)
