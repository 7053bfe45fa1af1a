"""
map-owners: owner mapping for already-scraped property data
============================================================

Reads one property (or a list of properties) as JSON and prints the owner
mapping consumed by the person/company file writers.

INPUT:
------
{
  "property_id": "12345",
  "owner_lines": ["SMITH JOHN A", "SMITH MARY"],
  "sales": [{"date": "4/1/2010", "grantor": "DOE JANE", "grantee": "SMITH JOHN A"}]
}

EXAMPLES:
---------
map-owners data/12345.json --source volusia
map-owners data/batch.json --name-order last_first --output out/owners.json --index

Exit codes: 0 success, 2 invalid input or configuration.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from .config import get_engine_config
from .engine import OwnershipEngine, run_many
from .models import ContractError, NameOrder
from .processing.indexing import OwnerIndex


EXIT_OK = 0
EXIT_INVALID_INPUT = 2


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configures logging to stderr and, optionally, a rotating file."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), colorize=True)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="map-owners",
        description="Classify owner names and build the ownership timeline of a property",
    )
    parser.add_argument('input', help='JSON file with property_id, owner_lines and sales')
    parser.add_argument('--source', default=None, help='Source profile (county) from the sources config')
    parser.add_argument('--config', default=None, help='Sources YAML (default: OWNERSHIP_SOURCES_CONFIG or config/sources.yaml)')
    parser.add_argument(
        '--name-order',
        choices=[order.value for order in NameOrder],
        default=None,
        help='Token order of names without a comma (overrides the profile)'
    )
    parser.add_argument('--output', default=None, help='Also write the mapping to this file')
    parser.add_argument('--index', action='store_true', help='Add person_N/company_N owner index')
    parser.add_argument(
        '--log-level',
        default=os.getenv("OWNERSHIP_LOG_LEVEL", "INFO"),
        help='Log level for stderr (default: OWNERSHIP_LOG_LEVEL or INFO)'
    )
    parser.add_argument('--log-file', default=None, help='Also log to this file (DEBUG, rotated)')
    return parser


def load_input(path: str) -> List[Dict[str, Any]]:
    """Reads the input file; a single object becomes a one-item list."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    raise ContractError(f"Input must be a JSON object or list, got {type(data).__name__}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        config = get_engine_config(args.source, args.config)
        if args.name_order:
            config = config.model_copy(update={"name_order": NameOrder(args.name_order)})

        engine = OwnershipEngine(config)
        results = run_many(engine, load_input(args.input))
    except (ContractError, OSError, json.JSONDecodeError) as exc:
        logger.error(f"❌ {exc}")
        return EXIT_INVALID_INPUT

    mapping: Dict[str, Any] = {}
    for result in results:
        payload = result.to_dict()
        if args.index:
            index = OwnerIndex.from_timeline(result.owners_by_date, engine.deduplicator)
            payload[result.key]["owner_index"] = index.to_dict()
        mapping.update(payload)

    text = json.dumps(mapping, indent=2, ensure_ascii=False)
    print(text)

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding='utf-8')
        logger.info(f"💾 Owner mapping saved: {output}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
