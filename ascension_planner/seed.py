"""Command line entry point that writes Star Rail entity records to JSON."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Callable, Dict, List, Sequence

from .data_loader import RemoteDataLoader
from .ingest import EntityRecord, HsrIngestor

logger = logging.getLogger(__name__)

KINDS: Dict[str, Callable[[HsrIngestor], List[EntityRecord]]] = {
    "light_cones": HsrIngestor.light_cones,
    "characters": HsrIngestor.characters,
}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build Star Rail records with ascension costs and precomputed stats."
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("data"),
        help="Directory that receives one <kind>.json file per record kind.",
    )
    parser.add_argument(
        "--only",
        choices=sorted(KINDS),
        action="append",
        help="Restrict seeding to the given kind; may be repeated.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log dataset fetches.")
    return parser.parse_args(argv)


def write_records(ingestor: HsrIngestor, output: Path, kinds: Sequence[str]) -> Dict[str, Path]:
    """Write ``<kind>.json`` for every kind and return the written paths."""

    output.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}
    for kind in kinds:
        records = KINDS[kind](ingestor)
        path = output / f"{kind}.json"
        with path.open("w", encoding="utf-8") as handle:
            json.dump([record.to_dict() for record in records], handle, indent=2, ensure_ascii=False)
        logger.info("Wrote %d %s to %s", len(records), kind, path)
        written[kind] = path
    return written


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    ingestor = HsrIngestor(RemoteDataLoader())
    write_records(ingestor, args.output, args.only or sorted(KINDS))


if __name__ == "__main__":
    main()
