"""Command line entrypoint for the wardrobe stylist."""

from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from logic.outfit_builder import generate_suggestions
from models.wardrobe_item import WardrobeItem, from_raw_metadata
from tools.weather_provider import WeatherSnapshot
from wardrobe_app.logging_config import configure_logging, get_logger

LOGGER = get_logger(__name__)


def load_items(path: Path) -> List[WardrobeItem]:
    """Read a JSON array of wardrobe items, skipping entries that fail validation."""

    raw_items = json.loads(path.read_text())
    items = []
    for raw in raw_items:
        try:
            items.append(from_raw_metadata(raw))
        except ValueError as exc:
            LOGGER.warning("Skipping wardrobe entry due to validation error: %s", exc)
    return items


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wardrobe stylist tools")
    subcommands = parser.add_subparsers(dest="command", required=True)

    suggest = subcommands.add_parser("suggest", help="Rank outfits from a wardrobe JSON file")
    suggest.add_argument("--items", type=Path, required=True, help="JSON array of wardrobe items")
    suggest.add_argument("--occasion", default="casual")
    suggest.add_argument("--temperature", type=float, help="Current temperature in °F")
    suggest.add_argument("--condition", default="clear")
    suggest.add_argument("--seed", type=int, help="Seed for reproducible shoe/accessory picks")
    suggest.add_argument("--limit", type=_positive_int, default=10)

    serve = subcommands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8080)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging("WARNING")

    if args.command == "serve":
        import uvicorn

        uvicorn.run("server.api:app", host=args.host, port=args.port, reload=False)
        return 0

    weather = None
    if args.temperature is not None:
        weather = WeatherSnapshot(temperature=args.temperature, condition=args.condition)
    suggestions = generate_suggestions(
        load_items(args.items),
        args.occasion,
        weather,
        random.Random(args.seed),
        max_suggestions=args.limit,
    )
    print(json.dumps([candidate.to_dict() for candidate in suggestions], indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
