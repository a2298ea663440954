"""Command line entry point for the Open PHACTS client.

Usage:
    python -m openphacts compound http://www.conceptwiki.org/concept/...
    python -m openphacts search aspirin --kind compound
    python -m openphacts classify http://www.chemspider.com
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from openphacts.errors import ShapeError, TransportError

if TYPE_CHECKING:
    from openphacts import OpenPhacts

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openphacts",
        description="Open PHACTS Linked Data API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Merged compound record with per-source provenance
    python -m openphacts compound http://www.conceptwiki.org/concept/38932552-111f-4a4e-a46a-4ed1d7bdf9d5

    # Concept search restricted to targets
    python -m openphacts search "adenosine receptor" --kind target --limit 5

    # Which source publishes a dataset URI (no network access)
    python -m openphacts classify http://purl.uniprot.org

Credentials are read from OPS_APP_ID and OPS_APP_KEY (or a .env file).
""",
    )

    # Configuration
    parser.add_argument(
        "--env",
        type=Path,
        help="Path to .env file (default: .env)",
    )
    parser.add_argument(
        "--lens",
        type=str,
        help="Lens applied to requests that accept one",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("compound", "Fetch a merged compound record"),
        ("target", "Fetch a merged target record"),
        ("disease", "Fetch a disease"),
        ("pathway", "Fetch pathway information"),
        ("tissue", "Fetch a tissue"),
        ("map", "List URIs equivalent to URI"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("uri", help="Entity URI")

    search = commands.add_parser("search", help="Search concepts by name")
    search.add_argument("query", help="Free text to search for")
    search.add_argument(
        "--kind",
        choices=["compound", "target"],
        default="compound",
        help="Concept type to search (default: compound)",
    )
    search.add_argument("--limit", type=int, metavar="N", help="Maximum number of hits")

    commands.add_parser("sources", help="Describe the loaded datasets")

    classify = commands.add_parser("classify", help="Classify a dataset URI")
    classify.add_argument("dataset_uri", help="Dataset URI as found in inDataset")

    commands.add_parser("version", help="Show library metadata")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the command line client."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "version":
        from openphacts.version import information

        return _emit(information())

    try:
        from openphacts import OpenPhacts
        from openphacts.config import Config

        config = Config.from_env(args.env)
        if args.lens:
            config.default_lens = args.lens
        client = OpenPhacts(config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.command == "classify":
        tag = client.classifier.classify(args.dataset_uri)
        return _emit({"dataset": args.dataset_uri, "source": tag.value})

    if not config.has_credentials():
        logger.warning("OPS_APP_ID/OPS_APP_KEY not set; the API will likely reject requests")

    handler = _HANDLERS[args.command]
    try:
        return _emit(handler(client, args))
    except TransportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ShapeError as e:
        print(f"Error: unexpected response shape: {e}", file=sys.stderr)
        return 1


def _compound(client: OpenPhacts, args: argparse.Namespace) -> object:
    from openphacts.api.compound import parse_compound

    result = client.compounds.information(args.uri).unwrap()
    return parse_compound(result, client.classifier).to_dict()


def _target(client: OpenPhacts, args: argparse.Namespace) -> object:
    from openphacts.api.target import parse_target

    result = client.targets.information(args.uri).unwrap()
    return parse_target(result, client.classifier).to_dict()


def _disease(client: OpenPhacts, args: argparse.Namespace) -> object:
    from openphacts.api.disease import parse_disease

    return parse_disease(client.diseases.information(args.uri).unwrap()).to_dict()


def _pathway(client: OpenPhacts, args: argparse.Namespace) -> object:
    from openphacts.api.pathway import parse_information

    return parse_information(client.pathways.information(args.uri).unwrap())


def _tissue(client: OpenPhacts, args: argparse.Namespace) -> object:
    from openphacts.api.tissue import parse_tissue

    return parse_tissue(client.tissues.information(args.uri).unwrap())


def _search(client: OpenPhacts, args: argparse.Namespace) -> object:
    from openphacts.api.conceptwiki import parse_search

    if args.kind == "target":
        response = client.concepts.find_targets(args.query, limit=args.limit)
    else:
        response = client.concepts.find_compounds(args.query, limit=args.limit)
    return parse_search(response.unwrap())


def _map(client: OpenPhacts, args: argparse.Namespace) -> object:
    from openphacts.api.mapping import parse_map

    return parse_map(client.mapping.map_uri(args.uri, lens_uri=args.lens).unwrap())


def _sources(client: OpenPhacts, args: argparse.Namespace) -> object:
    return client.sources.sources().unwrap()


_HANDLERS: dict[str, Callable[[OpenPhacts, argparse.Namespace], object]] = {
    "compound": _compound,
    "target": _target,
    "disease": _disease,
    "pathway": _pathway,
    "tissue": _tissue,
    "search": _search,
    "map": _map,
    "sources": _sources,
}


def _emit(payload: object) -> int:
    json.dump(payload, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
