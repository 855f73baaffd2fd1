"""
Data models for the movie catalog.
Defines the raw dataset row, the canonical Movie record and its small helper types.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import List, Optional, Tuple  # lists, optional values, and fixed-size tuples


@dataclass
class RawCatalogEntry:
	"""
	One row of the source dataset exactly as the reader understood it.
	Nothing is validated here; the loader decides what becomes a Movie.
	"""
	title: str  # may be empty in broken rows
	year: Optional[int]  # release year, None when missing or unparseable
	summary: str = ''  # free-text synopsis ("extract" in the source dataset)
	thumbnail: Optional[str] = None  # poster URL if the dataset has one
	genres: List[str] = field(default_factory=list)  # genre names, case-sensitive
	cast: List[str] = field(default_factory=list)  # cast member names in billing order


@dataclass(frozen=True)
class Genre:
	id: int  # small positive id assigned by the GenreRegistry
	name: str  # display name as it appears in the dataset


@dataclass(frozen=True)
class CastMember:
	id: int  # 1-based position in the movie's cast list
	name: str  # actor name from the dataset
	character: str  # synthetic placeholder ("Character 1", ...)
	profile_path: Optional[str] = None  # the dataset has no photos


@dataclass(frozen=True)
class SyntheticMetrics:
	"""
	Placeholder numbers fabricated at load time because the dataset has no
	ratings or popularity. Only meaningful for relative ordering.
	"""
	vote_average: float  # [0, 10)
	vote_count: int  # [0, 1000)
	popularity: float  # [0, 100)
	runtime: int  # minutes, [60, 120)


@dataclass(frozen=True)
class Movie:
	"""
	Canonical in-memory movie record served by every query.
	Instances are immutable; a reload builds brand new ones.
	"""
	id: int  # 1-based position in the raw dataset (not just valid rows)
	title: str  # required for validity
	overview: str  # may be empty
	poster_path: Optional[str]  # required for validity
	release_date: Optional[str]  # "YYYY-01-01", required for validity
	vote_average: float  # synthetic
	vote_count: int  # synthetic
	popularity: float  # synthetic
	runtime: int  # synthetic
	genre_ids: Tuple[int, ...] = ()  # ordered, derived from genre names
	genres: Tuple[Genre, ...] = ()  # same ids with display names
	cast: Tuple[CastMember, ...] = ()  # ordered cast with placeholder characters
	backdrop_path: Optional[str] = None  # never present in this data source
	adult: bool = False  # never set in this data source

	@property
	def is_valid(self) -> bool:
		"""A movie is servable only with a title, a release date and a poster."""
		return bool(self.title and self.release_date and self.poster_path)
