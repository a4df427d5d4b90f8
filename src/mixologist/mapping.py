"""Map parsed model objects onto the stable result contract."""

import logging
import random
import re
import time
from typing import Any

from mixologist.schema import FallbackKind, NormalizedResult, Pairing, PairingItem, RecipeItem, ShooterPair

logger = logging.getLogger(__name__)

UNTITLED = "Untitled Result"
NO_SNIPPET = "No snippet available."

_PAIRING_SECTIONS = {
    "wine": re.compile(r"Wine Pairing:\s*([^.]+)\.\s*Wine Notes:\s*([\s\S]*?)(?=\s*Spirit Pairing:|$)", re.IGNORECASE),
    "spirit": re.compile(r"Spirit Pairing:\s*([^.]+)\.\s*Spirit Notes:\s*([\s\S]*?)(?=\s*Beer Pairing:|$)", re.IGNORECASE),
    "beer": re.compile(r"Beer Pairing:\s*([^.]+)\.\s*Beer Notes:\s*([\s\S]*?)\s*$", re.IGNORECASE),
}

_PAIRING_DEFAULTS = {
    "wine": Pairing(name="Wine Selection", notes="Wine pairing information not available."),
    "spirit": Pairing(name="Spirit Selection", notes="Spirit pairing information not available."),
    "beer": Pairing(name="Beer Selection", notes="Beer pairing information not available."),
}

_FALLBACK_TITLES: dict[str, tuple[str, ...]] = {
    "food": (
        "Wine & Cocktail Pairing for {query}",
        "Perfect Drink Match for {query}",
        "Beverage Harmony with {query}",
    ),
    "liquor": (
        "Signature {query} Creation",
        "Craft {query} Cocktail",
        "Premium {query} Recipe",
    ),
    "general": (
        "Mixologist's {query} Special",
        "Craft Cocktail: {query} Inspired",
        "Artisan {query} Creation",
    ),
}


def _timestamp_ms(now: float | None) -> int:
    return int((now if now is not None else time.time()) * 1000)


def _map_one(index: int, raw: Any, timestamp: int, numbered_titles: bool) -> NormalizedResult | None:
    if not isinstance(raw, dict):
        return None
    item = RecipeItem.model_validate(raw)
    if not item.title and not item.snippet:
        return None

    default_title = f"Recommendation {index + 1}" if numbered_titles else UNTITLED
    return NormalizedResult(
        id=item.id or f"gemini-result-{index}-{timestamp}",
        title=item.title or default_title,
        file_path=item.file_path,
        snippet=item.snippet or NO_SNIPPET,
        why=item.why,
        has_upgrade=item.has_upgrade,
    )


def map_results(
    items: list[Any],
    query: str,
    *,
    numbered_titles: bool = False,
    now: float | None = None,
) -> list[NormalizedResult]:
    """Map raw objects in order, skipping ones with neither title nor snippet.

    Missing titles become "Untitled Result", or "Recommendation N" when
    `numbered_titles` is set.
    """
    timestamp = _timestamp_ms(now)
    results = []
    for index, raw in enumerate(items):
        result = _map_one(index, raw, timestamp, numbered_titles)
        if result is not None:
            results.append(result)
    logger.debug("mapped %d of %d items for %r", len(results), len(items), query)
    return results


def _clean_notes(notes: str) -> str:
    return re.sub(r"\s+", " ", notes).strip().rstrip(".")


def _pairing_from_snippet(kind: str, snippet: str) -> Pairing | None:
    match = _PAIRING_SECTIONS[kind].search(snippet or "")
    if not match:
        return None
    return Pairing(name=match.group(1).strip(), notes=_clean_notes(match.group(2)))


def map_food_pairing(result: NormalizedResult, raw: dict[str, Any] | None = None) -> NormalizedResult:
    """Attach wine, spirit and beer pairings.

    Sub-objects in the raw reply win, then the snippet's "Wine Pairing: ...
    Wine Notes: ..." sections, then placeholder selections.
    """
    item = PairingItem.model_validate(raw or {})
    found = {
        "wine": item.wine_pairing,
        "spirit": item.spirit_pairing,
        "beer": item.beer_pairing,
    }
    pairings = {
        kind: pairing or _pairing_from_snippet(kind, result.snippet) or _PAIRING_DEFAULTS[kind]
        for kind, pairing in found.items()
    }
    return result.model_copy(
        update={
            "wine_pairing": pairings["wine"],
            "spirit_pairing": pairings["spirit"],
            "beer_pairing": pairings["beer"],
        }
    )


def map_pairings(
    items: list[Any],
    query: str,
    *,
    numbered_titles: bool = False,
    now: float | None = None,
) -> list[NormalizedResult]:
    """`map_results` for food-pairing replies, with pairings attached."""
    timestamp = _timestamp_ms(now)
    results = []
    for index, raw in enumerate(items):
        result = _map_one(index, raw, timestamp, numbered_titles)
        if result is not None:
            results.append(map_food_pairing(result, raw))
    return results


def fallback_results(
    query: str,
    kind: FallbackKind,
    *,
    rng: random.Random | None = None,
    now: float | None = None,
) -> list[NormalizedResult]:
    """One hardcoded recommendation for when the model gives nothing usable."""
    title = (rng or random).choice(_FALLBACK_TITLES[kind]).format(query=query)
    if kind == "food":
        raw = {
            "title": title,
            "snippet": (
                f"A thoughtfully selected beverage that complements {query}. The pairing enhances "
                "both the food and drink experience through balanced flavors and complementary aromatics."
            ),
            "filePath": "willowpark.net",
            "why": "Professional pairing recommendation based on flavor harmony.",
        }
    elif kind == "liquor":
        raw = {
            "title": title,
            "snippet": (
                f"Ingredients: 2 oz {query}, 0.75 oz fresh citrus, 0.5 oz simple syrup, garnish. "
                "Instructions: Combine ingredients in shaker with ice, shake vigorously, "
                "strain into chilled glass, garnish appropriately."
            ),
            "filePath": None,
            "why": "Classic preparation method showcasing the spirit's character.",
        }
    else:
        raw = {
            "title": title,
            "snippet": (
                "Ingredients: 2 oz base spirit, 0.75 oz fresh citrus, 0.5 oz simple syrup, fresh garnish. "
                "Instructions: Shake with ice, strain into appropriate glassware, and garnish."
            ),
            "filePath": None,
            "why": "Expert mixologist recommendation crafted for optimal experience.",
        }
    return map_results([raw], query, now=now)


def _find_typed(items: list[dict[str, Any]], kind: str) -> dict[str, Any] | None:
    return next((item for item in items if str(item.get("type", "")).lower() == kind), None)


def map_shooter_pair(items: list[dict[str, Any]], liquor: str, *, now: float | None = None) -> ShooterPair:
    """Split a validated two-recipe reply into shooter and cocktail."""
    shooter = _find_typed(items, "shooter") or items[0]
    cocktail = _find_typed(items, "cocktail") or items[1]
    if cocktail is shooter:
        cocktail = items[1] if shooter is items[0] else items[0]
    mapped = map_results([shooter, cocktail], liquor, now=now)
    return ShooterPair(shooter=mapped[0], cocktail=mapped[1])


def fallback_shooter_pair(liquor: str, *, now: float | None = None) -> ShooterPair:
    name = " ".join(liquor.split()).title()
    mapped = map_results(
        [
            {
                "title": f"{name} Shot",
                "snippet": (
                    f"Ingredients: 0.75 oz {liquor}, 0.25 oz lime juice, pinch of salt. "
                    "Instructions: Shake with ice, strain into shot glass, serve immediately."
                ),
                "filePath": None,
            },
            {
                "title": f"{name} Sour",
                "snippet": (
                    f"Ingredients: 2 oz {liquor}, 0.75 oz lemon juice, 0.5 oz simple syrup. "
                    "Instructions: Shake with ice, strain into rocks glass over fresh ice, "
                    "garnish with lemon wheel."
                ),
                "filePath": None,
            },
        ],
        liquor,
        now=now,
    )
    return ShooterPair(shooter=mapped[0], cocktail=mapped[1])
