"""Core recommendation pipeline."""

import asyncio
import logging
from collections import deque
from datetime import date

from pydantic import ValidationError

from mixologist.cache import BaseCache, cache_key
from mixologist.classifier import classify
from mixologist.context import PromptContext, get_season
from mixologist.exceptions import CacheError, ConfigError, ParseError, UpstreamError
from mixologist.mapping import (
    fallback_results,
    fallback_shooter_pair,
    map_food_pairing,
    map_pairings,
    map_results,
    map_shooter_pair,
)
from mixologist.parsing import parse, parse_object, parse_recipe_pair, strip_code_fences
from mixologist.prompts import (
    build_comment_prompt,
    build_liquor_pair_prompt,
    build_prompt,
    build_upgrade_prompt,
    build_vision_prompt,
)
from mixologist.providers.base import COMMENT, LIQUOR_PAIR, SEARCH, UPGRADE, VISION, BaseGateway
from mixologist.recipe_text import extract_best_recipe, extract_ingredients
from mixologist.schema import (
    CacheEntry,
    Category,
    EnhancedComment,
    ImageDetection,
    ImageSearchResult,
    NormalizedResult,
    RecipeItem,
    RecipeType,
    SearchResponse,
    ShooterPair,
    UpgradeResult,
    UpgradeType,
)

logger = logging.getLogger(__name__)

MISSING_API_KEY = "API key for search service is not configured."

# Categories whose two results are a classic recipe followed by an elevated one.
_PAIRED_CATEGORIES = (Category.CLASSIC_COCKTAIL, Category.LIQUOR, Category.GENERIC_COCKTAIL)

_FALLBACK_COMMENTS: dict[str, str] = {
    "classic": "A timeless pour, built the way it was meant to be. Curious what an upgrade tastes like?",
    "elevate": "Same soul, sharper edges. This one is dressed up for the evening.",
}

_UPGRADE_INGREDIENTS: dict[str, list[str]] = {
    "seasonal": ["2 oz premium spirit", "1 oz seasonal syrup", "0.5 oz fresh citrus", "seasonal garnish"],
    "spicy": ["2 oz premium spirit", "0.5 oz spicy liqueur", "1 oz citrus", "jalapeño garnish"],
    "premium": ["2 oz top-shelf spirit", "0.75 oz premium liqueur", "0.5 oz artisan syrup", "premium garnish"],
    "festive": ["2 oz premium spirit", "1 oz celebration mixer", "0.5 oz sparkling addition", "festive garnish"],
}

_UPGRADE_COMMENTS: dict[str, str] = {
    "seasonal": "{season}'s finest creation, upgraded for pure sensation.",
    "spicy": "Heat and flavor combined, a bold upgrade that's perfectly designed.",
    "premium": "Luxury in liquid form, upgraded beyond the norm.",
    "festive": "Celebration in a glass, upgraded joy that's built to last.",
}


class RecentLines:
    """Bounded memory of recently generated comment lines."""

    def __init__(self, maxlen: int = 20):
        self._lines: deque[str] = deque(maxlen=maxlen)

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, line: object) -> bool:
        return line in self._lines

    def add(self, line: str) -> None:
        self._lines.append(line)

    def snapshot(self) -> list[str]:
        return list(self._lines)


def _build_gateway(api_key: str) -> BaseGateway:
    from mixologist.config import MixologistConfig
    from mixologist.providers.gemini import GeminiGateway

    return GeminiGateway(api_key=api_key, model=MixologistConfig.from_env().gemini_model)


def _resolve_gateway(api_key: str | None, gateway: BaseGateway | None) -> BaseGateway:
    if not api_key:
        raise ConfigError(MISSING_API_KEY)
    return gateway if gateway is not None else _build_gateway(api_key)


def _fallback(query: str, category: Category) -> list[NormalizedResult]:
    results = fallback_results(query, category.fallback_kind)
    if category is Category.FOOD:
        results = [map_food_pairing(result) for result in results]
    return results


def _comment_text(reply: str) -> str:
    data = parse_object(reply)
    if data is not None and isinstance(data.get("comment"), str):
        text = data["comment"]
    else:
        text = strip_code_fences(reply)
    return " ".join(text.split()).strip('"').strip()


async def generate_comment(
    title: str,
    ingredients: list[str],
    season: str,
    api_key: str | None,
    recipe_type: RecipeType = "classic",
    *,
    gateway: BaseGateway | None = None,
    recent: RecentLines | None = None,
) -> EnhancedComment:
    """Generate a short bartender line for a recipe.

    Args:
        title: Recipe title.
        ingredients: Ingredient strings mentioned in the prompt.
        season: Current season name.
        api_key: Gemini API key.
        recipe_type: "classic" shows the upgrade button, "elevate" does not.
        gateway: Model gateway. Built from `api_key` when omitted.
        recent: Lines to avoid repeating; the new line is recorded in it.

    Returns:
        EnhancedComment. Falls back to a canned line when the model call fails.

    Raises:
        ConfigError: If `api_key` is empty.
    """
    gateway = _resolve_gateway(api_key, gateway)
    prompt = build_comment_prompt(
        title,
        ingredients,
        season,
        recipe_type,
        recent.snapshot() if recent is not None else None,
    )

    text = ""
    try:
        text = _comment_text(await gateway.generate(prompt, settings=COMMENT))
    except UpstreamError as e:
        logger.warning("comment generation failed for %r: %s", title, e)

    if not text:
        text = _FALLBACK_COMMENTS[recipe_type]
    elif recent is not None:
        recent.add(text)
    return EnhancedComment(text=text, show_upgrade_button=recipe_type == "classic")


async def _attach_comments(
    results: list[NormalizedResult],
    api_key: str,
    gateway: BaseGateway,
    season: str,
    recent: RecentLines | None,
) -> list[NormalizedResult]:
    classic, elevated = results
    classic_comment, elevated_comment = await asyncio.gather(
        generate_comment(
            classic.title,
            extract_ingredients(classic.snippet),
            season,
            api_key,
            "classic",
            gateway=gateway,
            recent=recent,
        ),
        generate_comment(
            elevated.title,
            extract_ingredients(elevated.snippet),
            season,
            api_key,
            "elevate",
            gateway=gateway,
            recent=recent,
        ),
    )
    return [
        classic.model_copy(update={"enhanced_comment": classic_comment, "has_upgrade": True}),
        elevated.model_copy(update={"enhanced_comment": elevated_comment}),
    ]


async def fetch_and_process_results(
    query: str,
    api_key: str | None,
    *,
    category: Category | None = None,
    context: PromptContext | None = None,
    gateway: BaseGateway | None = None,
    recent: RecentLines | None = None,
) -> list[NormalizedResult]:
    """Classify, prompt, call the model and map the reply.

    Model and parse failures are absorbed into the category's fallback
    recipes, so the returned list is never empty.

    Raises:
        ConfigError: If `api_key` is empty.
    """
    gateway = _resolve_gateway(api_key, gateway)
    category = category or classify(query)
    context = context or PromptContext.current()
    prompt = build_prompt(category, query, context)
    logger.debug("category=%s season=%s theme=%s seed=%d", category.value, context.season, context.theme, context.seed)

    try:
        reply = await gateway.generate(prompt, settings=SEARCH)
    except UpstreamError as e:
        logger.warning("model call failed for %r, using fallback: %s", query, e)
        return _fallback(query, category)

    if category is Category.FLAVORED_LIQUOR:
        try:
            pair = map_shooter_pair(parse_recipe_pair(reply), query)
        except ParseError as e:
            logger.warning("invalid shooter pair for %r, using fallback: %s", query, e)
            pair = fallback_shooter_pair(query)
        return [pair.shooter, pair.cocktail]

    items = parse(reply)
    if category is Category.FOOD:
        results = map_pairings(items, query, numbered_titles=True)
    elif category is Category.FOOD_PAIRING_QUERY:
        results = map_results(items, query)
    else:
        results = map_results(items, query, numbered_titles=True)

    if not results:
        logger.warning("no usable results for %r, using fallback", query)
        return _fallback(query, category)

    if category in _PAIRED_CATEGORIES and len(results) == 2:
        results = await _attach_comments(results, api_key, gateway, context.season, recent)
    return results


async def _cache_get(cache: BaseCache, query: str) -> CacheEntry | None:
    try:
        return await cache.get(query)
    except CacheError as e:
        logger.warning("cache lookup failed, continuing without cache: %s", e)
        return None


async def _cache_set(cache: BaseCache, entry: CacheEntry) -> None:
    try:
        await cache.set(entry)
    except CacheError as e:
        logger.warning("cache write failed: %s", e)


async def search(
    query: str,
    api_key: str | None,
    cache: BaseCache | None = None,
    *,
    gateway: BaseGateway | None = None,
    recent: RecentLines | None = None,
) -> SearchResponse:
    """Run a text search, reading and writing the cache for non-special categories.

    Raises:
        ValueError: If `query` is blank.
        ConfigError: If `api_key` is empty.
    """
    query = (query or "").strip()
    if not query:
        raise ValueError("query is required")
    if not api_key:
        raise ConfigError(MISSING_API_KEY)

    category = classify(query)
    cacheable = cache is not None and not category.is_special

    if cacheable:
        entry = await _cache_get(cache, query)
        if entry is not None:
            logger.info("cache hit for %r", entry.query)
            return SearchResponse(
                results=entry.results,
                formatted_recipe=entry.formatted_recipe,
                category=category,
                cached=True,
            )

    results = await fetch_and_process_results(
        query,
        api_key,
        category=category,
        gateway=gateway,
        recent=recent,
    )
    formatted_recipe = extract_best_recipe(results)

    if cacheable:
        await _cache_set(
            cache,
            CacheEntry(query=cache_key(query), results=results, formatted_recipe=formatted_recipe),
        )
        logger.info("cached %d results for %r", len(results), cache_key(query))

    return SearchResponse(results=results, formatted_recipe=formatted_recipe, category=category)


async def detect_item_from_image(
    image_base64: str,
    api_key: str | None,
    *,
    gateway: BaseGateway | None = None,
) -> ImageDetection:
    """Ask the vision model what liquor or dish is in a photo.

    Raises:
        ConfigError: If `api_key` is empty.
        ImageError: If the image payload cannot be decoded.
    """
    gateway = _resolve_gateway(api_key, gateway)
    try:
        reply = await gateway.generate(build_vision_prompt(), settings=VISION, image_base64=image_base64)
    except UpstreamError as e:
        logger.warning("image analysis failed: %s", e)
        return ImageDetection(detected=False, details="Image analysis is unavailable right now.")

    data = parse_object(reply)
    if data is None:
        return ImageDetection(detected=False, details="Could not read the image analysis.")
    try:
        return ImageDetection.model_validate(data)
    except ValidationError as e:
        logger.warning("unexpected image analysis shape: %s", e)
        return ImageDetection(detected=False, details="Could not read the image analysis.")


async def recipes_from_liquor(
    liquor: str,
    api_key: str | None,
    *,
    gateway: BaseGateway | None = None,
    context: PromptContext | None = None,
) -> ShooterPair:
    """A shooter and a cocktail built on `liquor`, falling back to a fixed pair."""
    gateway = _resolve_gateway(api_key, gateway)
    context = context or PromptContext.current()
    try:
        reply = await gateway.generate(build_liquor_pair_prompt(liquor, context), settings=LIQUOR_PAIR)
        items = parse_recipe_pair(reply)
    except (UpstreamError, ParseError) as e:
        logger.warning("shooter pair for %r failed, using fallback: %s", liquor, e)
        return fallback_shooter_pair(liquor)
    return map_shooter_pair(items, liquor)


async def search_image(
    image_base64: str,
    api_key: str | None,
    *,
    gateway: BaseGateway | None = None,
    context: PromptContext | None = None,
) -> ImageSearchResult:
    """Detect what is in a photo and recommend drinks for it.

    Liquor yields a shooter and a cocktail, food yields three pairings.
    """
    gateway = _resolve_gateway(api_key, gateway)
    detection = await detect_item_from_image(image_base64, api_key, gateway=gateway)
    if not detection.detected or not detection.item:
        return ImageSearchResult(
            success=False,
            error=detection.details or "No liquor or food detected in the image.",
        )

    if detection.item_type == "food":
        pairings = await fetch_and_process_results(
            detection.item,
            api_key,
            category=Category.FOOD_PAIRING_QUERY,
            context=context,
            gateway=gateway,
        )
        return ImageSearchResult(
            success=True,
            detected_item=detection.item,
            item_type="food",
            pairings=pairings,
        )

    pair = await recipes_from_liquor(detection.item, api_key, gateway=gateway, context=context)
    return ImageSearchResult(
        success=True,
        detected_item=detection.item,
        item_type="liquor",
        shooter=pair.shooter,
        cocktail=pair.cocktail,
    )


def _fallback_upgrade(original_query: str, upgrade_type: UpgradeType, season: str) -> UpgradeResult:
    label = upgrade_type.capitalize()
    ingredients = ", ".join(_UPGRADE_INGREDIENTS[upgrade_type])
    return UpgradeResult(
        original_query=original_query,
        upgrade_type=upgrade_type,
        title=f"{label} {original_query}",
        snippet=(
            f"Ingredients: {ingredients}. Instructions: Combine ingredients with enhanced technique, "
            "serve with premium presentation."
        ),
        why=f"{label} upgrade provides enhanced flavors and presentation",
        enhanced_comment=EnhancedComment(
            text=_UPGRADE_COMMENTS[upgrade_type].format(season=season.capitalize()),
        ),
    )


async def upgrade_cocktail(
    original_query: str,
    upgrade_type: UpgradeType,
    api_key: str | None,
    *,
    gateway: BaseGateway | None = None,
    today: date | None = None,
) -> UpgradeResult:
    """Create a seasonal, spicy, premium or festive take on a cocktail."""
    gateway = _resolve_gateway(api_key, gateway)
    season = get_season((today or date.today()).month)

    data = None
    try:
        reply = await gateway.generate(build_upgrade_prompt(original_query, upgrade_type, season), settings=UPGRADE)
    except UpstreamError as e:
        logger.warning("upgrade for %r failed: %s", original_query, e)
    else:
        data = parse_object(reply)

    item = RecipeItem.model_validate(data) if data else None
    if item is None or not item.title or not item.snippet:
        return _fallback_upgrade(original_query, upgrade_type, season)

    comment = await generate_comment(
        item.title,
        extract_ingredients(item.snippet),
        season,
        api_key,
        "elevate",
        gateway=gateway,
    )
    return UpgradeResult(
        original_query=original_query,
        upgrade_type=upgrade_type,
        title=item.title,
        snippet=item.snippet,
        why=item.why or f"{upgrade_type.capitalize()} upgrade of {original_query}",
        enhanced_comment=comment,
    )
