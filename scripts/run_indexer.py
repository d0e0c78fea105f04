"""CLI entry point to rebuild the search index from the graph database."""
from __future__ import annotations

# ruff: noqa: E402

import argparse
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from reactome_indexer.exceptions import IndexerError
from reactome_indexer.pipelines.index_pipeline import run_indexer
from reactome_indexer.utils.logging import get_logger, set_level

LOGGER = get_logger("reactome_indexer.cli")


def main() -> None:
    parser = argparse.ArgumentParser(description="Index the Reactome graph into the search core")
    parser.add_argument(
        "--config",
        default="config/indexer.yaml",
        help="Path to the YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to $REACTOME_INDEXER_LOG_LEVEL or INFO)",
    )
    args = parser.parse_args()
    set_level(args.log_level)
    try:
        result = run_indexer(args.config)
    except IndexerError as exc:
        LOGGER.error("Indexing failed: %s", exc)
        sys.exit(1)
    LOGGER.info("Indexed %s entries", result.entries)


if __name__ == "__main__":
    main()
