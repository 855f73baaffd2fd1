"""
Recommendation module.
Builds a personalized feed from preferred genres and already-rated movies.
This is a rule-based heuristic (genre overlap + popularity), not a learned model.
"""

from typing import FrozenSet, Iterable, List, Optional

from loguru import logger

from .catalog import CatalogIndex
from .models import Movie
from .utils import paginate


class Recommender:
	"""
	Filters the catalog by genre preference and exclusions, then ranks by popularity.
	With no preferred genres the feed is simply the popularity ranking minus exclusions.
	"""

	def __init__(self, catalog: CatalogIndex):
		self.catalog = catalog

	def recommend(
		self,
		preferred_genre_ids: Optional[Iterable[int]] = None,
		exclude_movie_ids: Optional[Iterable[int]] = None,
		page: int = 1,
	) -> List[Movie]:
		"""
		- preferred_genre_ids: keep movies sharing ANY of these genres (empty = no filter)
		- exclude_movie_ids: drop these ids, typically the movies the user already rated
		- page: 1-based page of the popularity-ordered result
		"""
		preferred: FrozenSet[int] = frozenset(preferred_genre_ids or ())
		excluded: FrozenSet[int] = frozenset(exclude_movie_ids or ())

		candidates = self.catalog.all()
		if preferred:
			candidates = [m for m in candidates if any(g in preferred for g in m.genre_ids)]
		if excluded:
			candidates = [m for m in candidates if m.id not in excluded]

		candidates.sort(key=lambda m: m.popularity, reverse=True)  # stable
		logger.debug(
			f"[Recommender] preferred={sorted(preferred)} excluded={len(excluded)} -> {len(candidates)} candidates"
			+ ("" if preferred else " (popularity fallback)")
		)
		return paginate(candidates, page)
