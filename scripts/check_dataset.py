"""
Validate the movie dataset and report what the catalog would contain.

This script:
1) Reads the raw entries (JSON array or JSONL)
2) Builds the catalog exactly like the API does at startup
3) Reports kept/discarded counts and the genre table

Usage:
    python -m scripts.check_dataset [path] [--seed N]

Exits with status 1 when the dataset cannot be loaded, which is what the API
would refuse to start on.
"""

import argparse  # command-line arguments
import sys  # exit status

from loguru import logger  # console logging

from reelbase.config import Settings  # default dataset path
from reelbase.data_loader import DataLoader, DatasetError  # data ingestion
from reelbase.metrics import RandomMetricsPolicy  # placeholder metrics


def main(argv=None) -> int:
	settings = Settings.from_env()  # env defaults
	parser = argparse.ArgumentParser(description="Check the movie dataset")
	parser.add_argument("path", nargs="?", default=str(settings.data_path), help="dataset file")
	parser.add_argument("--seed", type=int, default=settings.seed, help="seed for synthetic metrics")
	args = parser.parse_args(argv)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info(f"Dataset check: {args.path}")
	logger.info("=" * 60)

	loader = DataLoader(RandomMetricsPolicy(args.seed))  # loader instance
	try:
		# 1) Read raw rows
		logger.info("[1/2] Reading raw entries...")
		entries = loader.read_entries(args.path)
		logger.info(f"[OK] {len(entries)} raw entries")

		# 2) Build catalog
		logger.info("[2/2] Building catalog...")
		genres, catalog = loader.load(entries)
	except DatasetError as e:
		logger.error(f"[FAIL] {e}")
		return 1

	logger.info(f"[OK] {len(catalog)} movies servable, {len(entries) - len(catalog)} discarded")
	for genre in genres.all():
		logger.info(f"  {genre.id:>3}  {genre.name:<24} {len(catalog.ids_for_genre(genre.id))} movies")
	logger.info("=" * 60)
	return 0


if __name__ == '__main__':
	sys.exit(main())  # propagate status
