"""
Synthetic metrics module.
The dataset carries no ratings, vote counts, popularity or runtimes, so the loader
fabricates them through a swappable policy. These numbers are placeholders used only
for relative ranking; they are not real audience data.
"""

import random
from typing import Optional, Tuple

from .models import RawCatalogEntry, SyntheticMetrics


class MetricsPolicy:
	"""
	Interface for anything that can produce placeholder metrics for a raw entry.
	"""

	def generate(self, entry: RawCatalogEntry) -> SyntheticMetrics:
		raise NotImplementedError

	def reset(self):
		"""Called at the start of every load. Stateless policies have nothing to do."""


class RandomMetricsPolicy(MetricsPolicy):
	"""
	Draws uniform placeholder values from a private, seedable random source:
	- vote_average: float in [0, 10)
	- vote_count: int in [0, 1000)
	- popularity: float in [0, 100)
	- runtime: int minutes in [60, 120)
	Passing a seed makes every load of the same dataset produce the same catalog.
	"""

	def __init__(
		self,
		seed: Optional[int] = None,
		max_vote_average: float = 10.0,
		max_vote_count: int = 1000,
		max_popularity: float = 100.0,
		runtime_range: Tuple[int, int] = (60, 120),
	):
		self.seed = seed
		self.max_vote_average = max_vote_average
		self.max_vote_count = max_vote_count
		self.max_popularity = max_popularity
		self.runtime_range = runtime_range
		self._rng = random.Random(seed)

	def reset(self):
		"""Restart the random stream so every load of a dataset draws the same values."""
		self._rng = random.Random(self.seed)

	def generate(self, entry: RawCatalogEntry) -> SyntheticMetrics:
		"""
		Produce one set of metrics. The entry is ignored: values are pure noise.
		Draw order is fixed so a seed fully determines the sequence.
		"""
		vote_average = self._rng.random() * self.max_vote_average
		vote_count = self._rng.randrange(self.max_vote_count)
		popularity = self._rng.random() * self.max_popularity
		runtime = self._rng.randrange(*self.runtime_range)
		return SyntheticMetrics(
			vote_average=vote_average,
			vote_count=vote_count,
			popularity=popularity,
			runtime=runtime,
		)
