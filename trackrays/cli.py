"""Batch projection of a GeoJSON line export against a keyword file.

Usage:
    trackrays --lines export.geojson --keywords tracks.csv --output rays.geojson
    trackrays --lines export.geojson --keywords tracks.csv --hide-unmatched

Output:
    GeoJSON FeatureCollection with entityIndex / color / label properties
"""

import argparse
import json
import sys
from pathlib import Path

from trackrays.conf.settings import settings
from trackrays.exceptions import TrackRaysError
from trackrays.ingestion import import_from_text, load_line_features
from trackrays.transform import recompute, summarize_matches
from trackrays.utils.io_utils import load_text, save_json
from trackrays.utils.logging_utils import get_logger, setup_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Project GPS lines as bearing rays colored by matched track"
    )
    parser.add_argument(
        "--lines",
        type=Path,
        required=True,
        help="GeoJSON FeatureCollection of LineString features",
    )
    parser.add_argument(
        "--keywords",
        type=Path,
        help="Keyword file, one track per line (comma-separated keywords)",
    )
    parser.add_argument(
        "--hide-unmatched",
        action="store_true",
        help="Drop lines that match no track",
    )
    parser.add_argument(
        "--hide",
        type=int,
        nargs="+",
        default=[],
        metavar="INDEX",
        help="Track indices to hide",
    )
    parser.add_argument(
        "--distance",
        type=float,
        default=None,
        help=f"Ray length in each direction, in {settings.ray_units} (default: {settings.ray_distance})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output GeoJSON path (default: stdout)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level",
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level)

    try:
        lines = load_line_features(load_text(args.lines))
        registry = import_from_text(load_text(args.keywords) if args.keywords else "")
    except (OSError, UnicodeDecodeError, TrackRaysError) as e:
        logger.error(f"Import failed: {e}")
        return 1

    registry = registry.set_show_unmatched(not args.hide_unmatched)
    for index in args.hide:
        registry = registry.set_visible(index, False)

    distance_m = None
    if args.distance is not None:
        distance_m = settings.model_copy(update={"ray_distance": args.distance}).ray_distance_m

    collection = recompute(lines, registry, distance_m=distance_m)

    summary = summarize_matches(lines, registry)
    logger.info("Match summary:\n" + summary.to_string(index=False))

    if args.output:
        save_json(collection.to_geojson(), args.output)
        logger.info(f"Wrote {len(collection.features)} rays to {args.output}")
    else:
        save_json_stdout(collection.to_geojson())

    return 0


def save_json_stdout(data) -> None:
    """Write pretty JSON to stdout."""
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


if __name__ == "__main__":
    sys.exit(main())
