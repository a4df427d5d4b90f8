"""Command-line interface for mixologist."""

import argparse
import asyncio
import logging
import sys

from mixologist import __version__, search
from mixologist.config import MixologistConfig
from mixologist.exceptions import ConfigError, MixologistError


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="mixologist",
        description="Get cocktail, shooter and food-pairing recommendations",
    )
    parser.add_argument("query", help="Cocktail, spirit or dish to search for")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--api-key",
        help="Gemini API key (default: GEMINI_API_KEY env var)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline decisions to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"mixologist {__version__}",
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    api_key = args.api_key or MixologistConfig.from_env().gemini_api_key

    try:
        response = asyncio.run(search(args.query, api_key))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (MixologistError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(response.model_dump_json(indent=2, by_alias=True, exclude_none=True))
    else:
        _print_formatted(response)

    return 0


def _print_formatted(response) -> None:
    """Print results in human-readable format."""
    print()
    print(f"  mixologist  ({response.category.value})")
    print()

    for result in response.results:
        print(f"  {result.title}")
        print(f"    {result.snippet}")
        if result.why:
            print(f"    Why: {result.why}")
        for label, pairing in (
            ("Wine", result.wine_pairing),
            ("Spirit", result.spirit_pairing),
            ("Beer", result.beer_pairing),
        ):
            if pairing:
                print(f"    {label + ':':<8} {pairing.name} - {pairing.notes}")
        if result.enhanced_comment:
            print(f'    "{result.enhanced_comment.text}"')
        print()

    if response.formatted_recipe:
        print(_indent(response.formatted_recipe.recipe))
        print()


def _indent(text: str) -> str:
    return "\n".join(f"  {line}" if line else "" for line in text.split("\n"))


if __name__ == "__main__":
    sys.exit(main())
