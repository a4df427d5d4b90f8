"""Prompt templates, one per query category.

Every template is a pure function of the query and a `PromptContext` and asks
the model for a JSON array of a fixed length. The query text is interpolated
as-is.
"""

from typing import Callable

from mixologist.context import PromptContext
from mixologist.schema import Category, RecipeType, UpgradeType

VARIATIONS = (
    "Create a unique variation of",
    "Suggest a modern twist on",
    "Provide a creative take on",
    "Give me an interesting version of",
    "Show me a premium recipe for",
    "What's a great way to make",
)

STYLES = (
    "classic style",
    "modern mixology approach",
    "craft cocktail style",
    "bartender's choice",
    "premium version",
    "traditional method",
)

RECIPE_RULES = """- At most 5 ingredients per recipe
- Every measurement in "oz" (dashes only for bitters)
- The snippet MUST read "Ingredients: ... Instructions: ..."
- Include glassware and garnish in the instructions"""

JSON_ONLY = "Return valid JSON only, with no text or markdown outside the array."

UPGRADE_DIRECTIONS: dict[str, str] = {
    "seasonal": "a {season} seasonal upgrade of \"{query}\" using seasonal ingredients",
    "spicy": "a spicy, bold upgrade of \"{query}\" using hot peppers and bold flavors",
    "premium": "a premium upgrade of \"{query}\" using top-shelf ingredients and sophisticated techniques",
    "festive": "a festive upgrade of \"{query}\" with celebration themes and special ingredients",
}


def _pick(options: tuple[str, ...], seed: int) -> str:
    return options[seed % len(options)]


def _display_name(query: str) -> str:
    return " ".join(query.split()).title()


def _classic_prompt(query: str, context: PromptContext) -> str:
    name = _display_name(query)
    return f"""
{_pick(VARIATIONS, context.seed)} a "{query}" cocktail using a {_pick(STYLES, context.seed // 7)}.

Return a JSON array with exactly 2 recipes:
1. The classic recipe, titled "Classic {name}", using common household ingredients.
2. An elevated {context.season} version for a {context.theme} theme, featuring {context.seasonal_juice} or {context.specialty_liqueur}.

[{{"title": "Classic {name}", "snippet": "Ingredients: 2 oz spirit, 1 oz mixer, 0.5 oz syrup. Instructions: method, glassware, garnish.", "filePath": null, "why": "the original", "hasUpgrade": true}},
 {{"title": "Elevated {name}", "snippet": "Ingredients: ... Instructions: ...", "filePath": null, "why": "what makes it special", "hasUpgrade": false}}]

Requirements:
{RECIPE_RULES}
- Avoid specialty liqueurs in the classic recipe unless it demands them
- Make it unique (seed: {context.seed})
- {JSON_ONLY}"""


def _shooter_prompt(query: str, context: PromptContext) -> str:
    return f"""
Create a shooter recipe for "{query}" using common home bar ingredients. Keep it simple and accessible.

Return a JSON array with exactly 1 shooter:
[{{"title": "Shot Name", "snippet": "Ingredients: 0.5 oz ingredient1, 0.5 oz ingredient2, splash of ingredient3. Instructions: layer or shake, serve immediately.", "filePath": null, "why": "perfect shooter"}}]

Focus on:
- At most 3 ingredients, measured in "oz", "dash" or "splash"
- Common ingredients: vodka, rum, whiskey, cranberry juice, lime juice, grenadine, or {context.flavored_spirit}
- Simple layering or mixing technique
- Bold flavors that work in small portions
- Unique variation (seed: {context.seed})
- {JSON_ONLY}"""


def _food_prompt(query: str, context: PromptContext) -> str:
    return f"""
Recommend drinks to pair with "{query}": one wine, one spirit, and one craft beer or ready-to-drink cocktail.

Return a JSON array with exactly 1 object:
[{{"title": "Perfect Pairings for {query}",
  "snippet": "Wine Pairing: wine name. Wine Notes: why it works. Spirit Pairing: spirit name. Spirit Notes: why it works. Beer Pairing: beer name. Beer Notes: why it works.",
  "filePath": "willowpark.net",
  "why": "expert pairing",
  "winePairing": {{"name": "specific wine", "notes": "one or two sentences"}},
  "spiritPairing": {{"name": "specific spirit", "notes": "one or two sentences"}},
  "beerPairing": {{"name": "specific beer or RTD", "notes": "one or two sentences"}}}}]

Include:
- Specific products, never generic types ("Antinori Chianti Classico", not "red wine")
- Flavor-harmony reasoning suited to {context.season}
- Unique suggestion (seed: {context.seed})
- {JSON_ONLY}"""


def _food_pairing_query_prompt(query: str, context: PromptContext) -> str:
    return f"""
"{query}" was recognized in a photo. This is a beverage pairing request: never return food recipes.

Return a JSON array with exactly 3 pairing recommendations, in this order:
1. a wine, titled "[Specific wine] - Wine Pairing for {query}"
2. a spirit, titled "[Specific spirit] - Spirit Pairing for {query}"
3. a craft beer or ready-to-drink cocktail, titled "[Specific product] - Beer Pairing for {query}"

[{{"title": "...", "snippet": "Pairing Notes: why this works. Serving Suggestion: temperature and glass.", "filePath": "willowpark.net"}}]

Requirements:
- Specific products, never generic types
- Interesting but appropriate choices (seed: {context.seed})
- {JSON_ONLY}"""


def _liquor_prompt(query: str, context: PromptContext) -> str:
    name = _display_name(query)
    return f"""
{_pick(VARIATIONS, context.seed)} a cocktail featuring "{query}" as the main spirit, using common home bar ingredients.

Return a JSON array with exactly 2 recipes:
1. A classic {name} cocktail, titled "Classic ..."
2. An elevated {context.season} signature drink for a {context.theme} theme, using {context.seasonal_juice}

[{{"title": "Classic {name} Cocktail", "snippet": "Ingredients: 2 oz {query}, additional ingredients with measurements. Instructions: method, garnish, glassware.", "filePath": null, "why": "showcases the spirit", "hasUpgrade": true}},
 {{"title": "Signature {name} Cocktail", "snippet": "Ingredients: ... Instructions: ...", "filePath": null, "why": "why it works", "hasUpgrade": false}}]

Requirements:
{RECIPE_RULES}
- 2 oz of {query} as the base of both recipes
- Accessible mixers: citrus juices, simple syrup, club soda, ginger beer, grenadine
- Unique creation (seed: {context.seed})
- {JSON_ONLY}"""


def _shooter_pair_prompt(query: str, context: PromptContext) -> str:
    return f"""
Create both a shooter recipe and a full cocktail recipe using "{query}" as the main ingredient.

Return a JSON array with exactly 2 recipes, shooter first:
[{{"type": "shooter", "title": "Creative shooter name", "snippet": "Ingredients: 0.5 oz {query}, 0.5 oz complementary liqueur, splash of mixer. Instructions: shake or layer, serve in a shot glass.", "filePath": null}},
 {{"type": "cocktail", "title": "Creative cocktail name", "snippet": "Ingredients: 2 oz {query}, 1-2 mixers with measurements. Instructions: complete method, glass, garnish.", "filePath": null}}]

Requirements for the SHOOTER:
- Pair it with {context.flavored_spirit} or {context.specialty_liqueur}
- Measurements in "oz" (0.5 oz, 0.25 oz, dash, splash)

Requirements for the COCKTAIL:
- 2 oz {query} as the base spirit
- At most 3 ingredients in total
- Kitchen-friendly mixers: lemon juice, lime juice, simple syrup, club soda, tonic water

Both recipes: creative names related to {query}, unique variations (seed: {context.seed}).
Every object MUST have non-empty "title" and "snippet" and a "filePath" key.
{JSON_ONLY}"""


def _generic_prompt(query: str, context: PromptContext) -> str:
    return f"""
{_pick(VARIATIONS, context.seed)} a cocktail inspired by "{query}" using a {_pick(STYLES, context.seed // 7)}.

Return a JSON array with exactly 2 recipes:
1. A classic interpretation using common home bar ingredients
2. An elevated {context.season} version for a {context.theme} theme, using {context.seasonal_juice}

[{{"title": "Creative Cocktail Name", "snippet": "Ingredients: base spirit with measurement, mixers with measurements. Instructions: steps, glassware, garnish.", "filePath": null, "why": "creative interpretation", "hasUpgrade": true}},
 {{"title": "Elevated Cocktail Name", "snippet": "Ingredients: ... Instructions: ...", "filePath": null, "why": "what makes it special", "hasUpgrade": false}}]

Focus on:
{RECIPE_RULES}
- Accessible ingredients: vodka, rum, whiskey, gin, citrus juices, simple syrup, club soda, tonic, ginger beer
- Unique approach (seed: {context.seed})
- {JSON_ONLY}"""


_TEMPLATES: dict[Category, Callable[[str, PromptContext], str]] = {
    Category.CLASSIC_COCKTAIL: _classic_prompt,
    Category.SHOOTER: _shooter_prompt,
    Category.FOOD: _food_prompt,
    Category.FOOD_PAIRING_QUERY: _food_pairing_query_prompt,
    Category.LIQUOR: _liquor_prompt,
    Category.FLAVORED_LIQUOR: _shooter_pair_prompt,
    Category.GENERIC_COCKTAIL: _generic_prompt,
}


def build_prompt(category: Category, query: str, context: PromptContext) -> str:
    """Render the prompt template for `category`."""
    return _TEMPLATES[category](query, context)


def build_liquor_pair_prompt(liquor: str, context: PromptContext) -> str:
    """Shooter + cocktail prompt for a liquor recognized in a photo."""
    return _shooter_pair_prompt(liquor, context)


def build_comment_prompt(
    title: str,
    ingredients: list[str],
    season: str,
    recipe_type: RecipeType,
    recent_lines: list[str] | None = None,
) -> str:
    framing = (
        "the timeless classic version; tease that an upgrade is available"
        if recipe_type == "classic"
        else "the elevated, upgraded version; celebrate what makes it special"
    )
    joined = ", ".join(ingredients)
    avoid = ""
    if recent_lines:
        quoted = "\n".join(f'- "{line}"' for line in recent_lines)
        avoid = f"\nDo not repeat any of these lines:\n{quoted}\n"
    return f"""
You are a witty bartender. Write one short line (under 120 characters) about "{title}",
made with {joined}. This is {framing}. It is {season}.
Do not repeat a line you have already used in this session.{avoid}
Return JSON only: {{"comment": "your line"}}"""


def build_vision_prompt() -> str:
    return """
Analyze this image and identify any liquor bottle, wine bottle, alcoholic beverage, or food dish.

Focus on:
- Brand names and text on labels
- Type of alcohol (vodka, rum, whiskey, wine, etc.) and flavor variations (vanilla, coconut, spiced, etc.)
- For food, the name of the dish

Return JSON:
{
    "detected": true/false,
    "itemType": "liquor" or "food",
    "item": "specific brand and type, or dish name",
    "category": "vodka/rum/whiskey/wine/liqueur/dish/etc",
    "flavor": "flavor variation if any",
    "confidence": 0.0-1.0,
    "details": "what you see in the image"
}

If nothing relevant is detected, return:
{"detected": false, "confidence": 0.0, "details": "description of what is visible instead"}"""


def build_upgrade_prompt(query: str, upgrade_type: UpgradeType, season: str) -> str:
    direction = UPGRADE_DIRECTIONS[upgrade_type].format(season=season, query=query)
    return f"""
Create {direction}.

Return JSON format:
{{"title": "Upgraded Cocktail Name", "snippet": "Ingredients: detailed list with measurements. Instructions: complete preparation method with any special techniques.", "filePath": null, "why": "explanation of the upgrade"}}

Requirements:
{RECIPE_RULES}
- Return valid JSON only"""
