"""
Query engine module.
Implements the discovery listings over the catalog: popularity and rating rankings,
text search, genre filtering and genre-overlap similarity.
"""

from typing import List, Optional

from loguru import logger

from .catalog import CatalogIndex
from .models import Movie
from .utils import PAGE_SIZE, paginate


class QueryEngine:
	"""
	Pure, read-only queries over a CatalogIndex snapshot.
	All sorts are stable, so equal scores keep catalog order and pages never overlap.
	"""

	# similar() is capped rather than paginated
	SIMILAR_LIMIT = PAGE_SIZE

	def __init__(self, catalog: CatalogIndex):
		self.catalog = catalog
		# Rankings never change after load, so compute them once
		self._by_popularity = sorted(catalog, key=lambda m: m.popularity, reverse=True)
		self._by_rating = sorted(catalog, key=lambda m: m.vote_average, reverse=True)
		logger.debug(f"[Query] Engine ready over {len(catalog)} movies")

	def popular(self, page: int = 1) -> List[Movie]:
		"""Movies by synthetic popularity, highest first."""
		return paginate(self._by_popularity, page)

	def top_rated(self, page: int = 1) -> List[Movie]:
		"""Movies by synthetic vote average, highest first."""
		return paginate(self._by_rating, page)

	def search(self, query: str, page: int = 1) -> List[Movie]:
		"""
		Case-insensitive substring match on title or overview, in catalog order.
		A blank query matches nothing.
		"""
		if not query or not query.strip():
			logger.debug("[Query] Blank search query, returning no results")
			return []

		needle = query.lower()
		matches = [
			m for m in self.catalog
			if needle in m.title.lower() or (m.overview and needle in m.overview.lower())
		]
		logger.debug(f"[Query] search '{query}' matched {len(matches)} movies")
		return paginate(matches, page)

	def by_genre(self, genre_id: int, page: int = 1) -> List[Movie]:
		"""Movies tagged with a genre, in catalog order."""
		movies = [self.catalog.by_id(movie_id) for movie_id in self.catalog.ids_for_genre(genre_id)]
		return paginate(movies, page)

	def details(self, movie_id: int) -> Optional[Movie]:
		return self.catalog.by_id(movie_id)

	def similar(self, movie_id: int) -> List[Movie]:
		"""
		Other movies sharing at least one genre with the given one, most shared genres
		first. Unknown ids have no similar movies.
		"""
		target = self.catalog.by_id(movie_id)
		if target is None:
			logger.debug(f"[Query] similar: movie {movie_id} not in catalog")
			return []

		target_genres = set(target.genre_ids)
		scored = []  # (shared count, movie) in catalog order
		for movie in self.catalog:
			if movie.id == target.id:
				continue
			shared = sum(1 for genre_id in movie.genre_ids if genre_id in target_genres)
			if shared:
				scored.append((shared, movie))

		scored.sort(key=lambda pair: pair[0], reverse=True)  # stable: ties keep catalog order
		logger.debug(f"[Query] similar to {movie_id}: {len(scored)} candidates share a genre")
		return [movie for _, movie in scored[:self.SIMILAR_LIMIT]]
