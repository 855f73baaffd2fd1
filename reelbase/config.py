"""
Configuration for the catalog service.

Values come from environment variables (optionally via a .env file). Invalid values
are logged and replaced by defaults instead of failing startup.
"""
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

ENV_DATA_PATH = "REELBASE_DATA_PATH"
ENV_SEED = "REELBASE_SEED"
ENV_LOG_LEVEL = "REELBASE_LOG_LEVEL"

DEFAULT_DATA_PATH = Path("data/movies.json")
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _get_optional_int_env(key: str) -> Optional[int]:
	"""
	Parse an optional integer from the environment.

	Args:
		key: Environment variable name

	Returns:
		The integer, or None when unset, blank or invalid
	"""
	raw = os.environ.get(key)
	if raw is None or not raw.strip():
		return None
	try:
		return int(raw)
	except ValueError:
		logger.warning(f"Invalid {key}='{raw}', ignoring")
		return None


def _get_log_level_env(key: str, default: str) -> str:
	level = os.environ.get(key, default).strip().upper()
	if level not in LOG_LEVELS:
		logger.warning(f"Invalid {key}='{level}', using {default}")
		return default
	return level


@dataclass(frozen=True)
class Settings:
	data_path: Path = DEFAULT_DATA_PATH
	seed: Optional[int] = None  # None: synthetic metrics differ on every start
	log_level: str = DEFAULT_LOG_LEVEL

	@classmethod
	def from_env(cls) -> "Settings":
		"""Read settings from the current environment."""
		return cls(
			data_path=Path(os.environ.get(ENV_DATA_PATH, str(DEFAULT_DATA_PATH))),
			seed=_get_optional_int_env(ENV_SEED),
			log_level=_get_log_level_env(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
		)


def configure_logging(level: str = DEFAULT_LOG_LEVEL):
	"""Send loguru output to stderr at the given level, replacing existing sinks."""
	logger.remove()
	logger.add(sys.stderr, level=level)
