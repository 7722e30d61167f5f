#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Script: main.py
Location: src/wall_layer_decomposer/main.py

Description:
    Command-line entry point for the wall layer decomposer. Loads a JSON
    model document, decomposes the selected composite walls into
    single-layer walls, reconciles them at junctions and writes the
    resulting model.

Usage:
    python -m wall_layer_decomposer.main model.json --walls w1 w2 --output out.json
    python -m wall_layer_decomposer.main model.json --purge --report report.json

Dependencies:
    - pydantic
"""

import argparse
import json
import sys
from typing import Dict, Any, List, Optional

from pydantic import ValidationError

from wall_layer_decomposer.config.settings import DecompositionSettings
from wall_layer_decomposer.decomposer.batch import WallDecomposer
from wall_layer_decomposer.errors import TransactionFatalError
from wall_layer_decomposer.model_store.memory_store import InMemoryModelStore
from wall_layer_decomposer.utils.logging_config import DecomposerLogger, get_logger

logger = get_logger(__name__)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Decompose composite walls into single-layer walls"
    )

    parser.add_argument(
        "model",
        help="Path to the JSON model document"
    )
    parser.add_argument(
        "--walls",
        nargs="+",
        help="Ids of the walls to decompose (default: every composite wall)"
    )

    # Output options
    parser.add_argument(
        "--output",
        help="Path of the resulting model document (optional)"
    )
    parser.add_argument(
        "--report",
        help="Path of a JSON report with per-wall results (optional)"
    )

    # Processing options
    parser.add_argument(
        "--config",
        help="Path to a JSON file with decomposition settings"
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        help="Junction tolerance in mm (overrides settings)"
    )
    parser.add_argument(
        "--purge",
        action="store_true",
        help="Delete generated wall types no wall uses after decomposition"
    )
    parser.add_argument(
        "--log-dir",
        help="Directory for log files (default: console only)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )

    return parser.parse_args(argv)


def load_settings(store: InMemoryModelStore, args) -> DecompositionSettings:
    """Merge document settings, a settings file and command-line overrides."""
    values: Dict[str, Any] = dict(store.settings)
    if args.config:
        with open(args.config, "r", encoding="utf-8") as f:
            values.update(json.load(f))
    if args.tolerance is not None:
        values["junction_tolerance_mm"] = args.tolerance
    return DecompositionSettings.from_dict(values)


def default_wall_selection(store: InMemoryModelStore) -> List[str]:
    """Ids of every wall whose type is composite."""
    selected = []
    for wall in store.enumerate_walls():
        wall_type = store.get_wall_type(wall.type_id)
        if wall_type is not None and wall_type.is_composite:
            selected.append(wall.element_id)
    return selected


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = parse_arguments(argv)
    log_file = DecomposerLogger.configure(debug_mode=args.debug, log_dir=args.log_dir)
    if log_file:
        logger.info("Logging to %s", log_file)

    try:
        store = InMemoryModelStore.from_json(args.model)
        settings = load_settings(store, args)
    except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
        logger.error("Cannot load %s: %s", args.model, e)
        return 2

    wall_ids = args.walls or default_wall_selection(store)
    if not wall_ids:
        logger.warning("No composite walls to decompose")

    decomposer = WallDecomposer(store, settings)
    try:
        summary = decomposer.run_batch(wall_ids, purge=args.purge)
    except TransactionFatalError as e:
        logger.error("Decomposition aborted, model unchanged: %s", e.detail)
        return 1

    if args.output:
        store.save_json(args.output)
    if args.report:
        with open(args.report, "w", encoding="utf-8") as f:
            json.dump(summary.to_dict(), f, indent=2)
        logger.info("Report written to %s", args.report)

    for line in summary.summary_lines():
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
