"""
Data loading and catalog building module.
Reads the raw movie dataset (JSON array or JSONL), normalizes every row into a Movie,
assigns ids and genre ids, and keeps only the movies that can be served.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON arrays and JSON lines
from typing import Any, Dict, Iterable, List, Optional, Tuple  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our data classes and the components the loader populates
from .models import CastMember, Genre, Movie, RawCatalogEntry  # structured records
from .genres import GenreRegistry  # name <-> id mapping
from .catalog import CatalogIndex  # final read-only collection
from .metrics import MetricsPolicy, RandomMetricsPolicy  # placeholder numbers

# Console logging
from loguru import logger  # console logger


class DatasetError(Exception):
	"""The raw dataset is missing, unreadable or malformed. Fatal at startup."""


class DataLoader:
	"""
	Handles reading the raw dataset and turning it into a GenreRegistry + CatalogIndex.
	"""

	# Alternative key names accepted for the same raw field, first match wins
	SUMMARY_KEYS = ('extract', 'summary', 'overview')
	THUMBNAIL_KEYS = ('thumbnail', 'poster_path', 'poster_url')

	def __init__(self, metrics_policy: Optional[MetricsPolicy] = None):
		"""Initialize the loader with the policy that fabricates rating/popularity numbers."""
		self.metrics_policy = metrics_policy or RandomMetricsPolicy()  # unseeded unless told otherwise

	def load_catalog(self, filepath: str) -> Tuple[GenreRegistry, CatalogIndex]:
		"""Read a dataset file and build the catalog from it in one step."""
		entries = self.read_entries(filepath)  # may raise DatasetError
		return self.load(entries)  # normalize + filter

	def read_entries(self, filepath: str) -> List[RawCatalogEntry]:
		"""
		Read raw entries from disk.
		- '.jsonl' files hold one JSON object per line
		- anything else must hold a single JSON array of objects
		Any problem raises DatasetError; a partially read dataset is never returned.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise DatasetError(f"Movie data file not found: {filepath}")

		logger.info(f"[DataLoader] Reading raw entries from {filepath}...")  # log action

		try:
			with open(filepath, 'r', encoding='utf-8') as f:
				if filepath.suffix == '.jsonl':
					rows = self._read_jsonl_rows(f)  # line-by-line
				else:
					rows = json.load(f)  # whole document
		except json.JSONDecodeError as e:
			raise DatasetError(f"Invalid JSON in {filepath}: {e}") from e
		except (OSError, UnicodeDecodeError) as e:
			raise DatasetError(f"Could not read {filepath}: {e}") from e

		# The array form must really be an array
		if not isinstance(rows, list):
			raise DatasetError(f"Expected a JSON array of movies in {filepath}, got {type(rows).__name__}")

		entries = [self._parse_entry(row, position) for position, row in enumerate(rows, 1)]  # strict per row
		logger.info(f"[DataLoader] Read {len(entries)} raw entries.")  # summary
		return entries  # return list

	def _read_jsonl_rows(self, f) -> List[Any]:
		"""Parse a JSONL stream, reporting the offending line number on failure."""
		rows = []  # accumulator
		for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
			line = line.strip()
			if not line:  # tolerate blank lines (e.g. trailing newline)
				continue
			try:
				rows.append(json.loads(line))  # parse JSON object per line
			except json.JSONDecodeError as e:
				raise DatasetError(f"Invalid JSON at line {line_num}: {e}") from e
		return rows

	def _parse_entry(self, data: Any, position: int) -> RawCatalogEntry:
		"""
		Convert a raw dictionary (from file) into a RawCatalogEntry.
		Only the shape is checked here; validity is decided after normalization.
		"""
		if not isinstance(data, dict):
			raise DatasetError(f"Entry {position} is not an object: {data!r:.80}")

		return RawCatalogEntry(
			title=self._normalize_text(data.get('title')),  # may end up empty
			year=self._parse_year(data.get('year')),  # None if unusable
			summary=self._normalize_text(self._first_present(data, self.SUMMARY_KEYS)),  # synopsis
			thumbnail=self._normalize_text(self._first_present(data, self.THUMBNAIL_KEYS)) or None,  # poster
			genres=self._parse_comma_separated(data.get('genres', [])),  # list of genre names
			cast=self._parse_comma_separated(data.get('cast', [])),  # list of actor names
		)

	def load(self, entries: Iterable[RawCatalogEntry]) -> Tuple[GenreRegistry, CatalogIndex]:
		"""
		Build the catalog from raw entries, in dataset order.
		Every entry gets an id (its 1-based position) and registers its genres,
		but only valid movies make it into the index.
		"""
		self.metrics_policy.reset()  # same seed, same numbers on every load
		registry = GenreRegistry()  # fresh registry per load
		movies: List[Movie] = []  # valid movies only
		discarded = 0  # count of rows filtered out

		for position, entry in enumerate(entries, 1):
			movie = self._build_movie(position, entry, registry)  # normalize
			if movie.is_valid:
				movies.append(movie)  # keep
			else:
				discarded += 1
				logger.debug(f"[DataLoader] Discarding entry {position} ('{entry.title}'): missing title, year or poster")

		registry.freeze()  # no new genres after load
		catalog = CatalogIndex(movies)  # read-only index

		logger.info(
			f"[DataLoader] Catalog ready | kept={len(catalog)} discarded={discarded} genres={len(registry)}"
		)
		return registry, catalog

	def _build_movie(self, position: int, entry: RawCatalogEntry, registry: GenreRegistry) -> Movie:
		"""
		Turn one raw entry into the canonical Movie shape.
		Repeated genre names within one entry are collapsed to a single id, unlike the
		original app which kept the repeats; shared-genre counts are per distinct genre.
		"""
		# Register genres first so ids follow first-seen order across the whole dataset
		genres = tuple(Genre(id=registry.id_for(name), name=name) for name in dict.fromkeys(entry.genres))

		# Placeholder numbers come from the policy, never from the data
		metrics = self.metrics_policy.generate(entry)

		# Only the year is known; month and day are synthesized
		release_date = f"{entry.year}-01-01" if entry.year is not None else None

		# Character names are placeholders too
		cast = tuple(
			CastMember(id=idx, name=name, character=f"Character {idx}")
			for idx, name in enumerate(entry.cast, 1)
		)

		return Movie(
			id=position,  # position among all raw entries
			title=entry.title,
			overview=entry.summary,
			poster_path=entry.thumbnail,
			release_date=release_date,
			vote_average=metrics.vote_average,
			vote_count=metrics.vote_count,
			popularity=metrics.popularity,
			runtime=metrics.runtime,
			genre_ids=tuple(g.id for g in genres),
			genres=genres,
			cast=cast,
		)

	def _first_present(self, data: Dict, keys: Tuple[str, ...]) -> Any:
		"""Return the value of the first key that holds something truthy."""
		for key in keys:
			if data.get(key):
				return data[key]
		return None

	def _parse_year(self, value: Any) -> Optional[int]:
		"""Accept ints, integral floats and digit strings; anything else means unknown."""
		if value is None or isinstance(value, bool):  # bool is an int subclass
			return None
		if isinstance(value, int):
			return value
		if isinstance(value, float) and value.is_integer():
			return int(value)
		if isinstance(value, str) and value.strip().isdigit():
			return int(value.strip())
		return None

	def _parse_comma_separated(self, value) -> List[str]:
		"""
		Normalize a value that may be None, a list, or a comma-separated string
		into a list of clean strings.
		"""
		if value is None:  # missing field
			return []  # treat as empty list
		if isinstance(value, list):  # already a list
			return [str(item).strip() for item in value if item and str(item).strip()]  # clean each
		if isinstance(value, str):  # comma-separated string
			return [item.strip() for item in value.split(',') if item.strip()]  # split/trim
		return []  # any other type becomes empty

	def _normalize_text(self, text: Any) -> str:
		"""
		Trim whitespace; handle None safely by returning empty string.
		Case is preserved since these values are displayed.
		"""
		if not text:  # None or empty
			return ''  # normalize to empty
		return str(text).strip()  # standardized text
