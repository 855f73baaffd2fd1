"""
Genre registry.
Mapping from genre names to small integer ids, filled once while
the catalog loads and read-only afterwards.
"""

from typing import Dict, List

from loguru import logger

from .models import Genre


class GenreRegistry:
	"""
	Assigns ids 1, 2, 3, ... to genre names in first-seen order.
	Names are case-sensitive: "Drama" and "drama" are two genres.
	"""

	def __init__(self):
		self._ids_by_name: Dict[str, int] = {}  # name -> id
		self._frozen = False

	def id_for(self, name: str) -> int:
		"""Return the id for a genre name, assigning the next one on first sight."""
		existing = self._ids_by_name.get(name)
		if existing is not None:
			return existing
		if self._frozen:
			raise RuntimeError(f"Genre registry is frozen; cannot register '{name}'")

		genre_id = len(self._ids_by_name) + 1
		self._ids_by_name[name] = genre_id
		logger.debug(f"[Genres] Registered '{name}' as {genre_id}")
		return genre_id

	def all(self) -> List[Genre]:
		"""All genres in first-seen order (dicts keep insertion order)."""
		return [Genre(id=genre_id, name=name) for name, genre_id in self._ids_by_name.items()]

	def freeze(self):
		"""Stop accepting new names; called by the loader once every entry is processed."""
		self._frozen = True
		logger.debug(f"[Genres] Frozen with {len(self)} genres")

	def __len__(self) -> int:
		return len(self._ids_by_name)
