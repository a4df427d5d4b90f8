"""Pull ingredients and steps out of free-text recipe snippets."""

import re

from mixologist.schema import BestRecipe, NormalizedResult

DEFAULT_INGREDIENTS = ["Premium spirits", "Quality mixers"]

_INGREDIENTS = re.compile(r"Ingredients:\s*([\s\S]*?)(?=\s*Instructions:|$)", re.IGNORECASE)
_INSTRUCTIONS = re.compile(r"Instructions:\s*([\s\S]*)", re.IGNORECASE)
_INGREDIENTS_LOOSE = re.compile(
    r"Ingredients:\s*([\s\S]*?)(?=\s*Instructions?:|Method:|Preparation:|$)", re.IGNORECASE
)
_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)](?=\s))\s*")


def _clean_lines(block: str) -> str:
    lines = (_LIST_MARKER.sub("", line).strip() for line in block.strip().split("\n"))
    return "\n".join(line for line in lines if line)


def extract_recipe(snippet: str) -> str | None:
    """Format a snippet as "Ingredients ... Steps ...".

    Returns None unless both sections are present and non-empty.
    """
    if not snippet:
        return None

    ingredients = ""
    steps = ""
    match = _INGREDIENTS.search(snippet)
    if match:
        ingredients = _clean_lines(match.group(1))
    match = _INSTRUCTIONS.search(snippet)
    if match:
        steps = _clean_lines(match.group(1))

    if not (ingredients and steps):
        return None
    return f"Ingredients\n{ingredients}\n\nSteps\n{steps}"


def extract_best_recipe(results: list[NormalizedResult]) -> BestRecipe | None:
    """First result whose snippet formats as a complete recipe."""
    for result in results:
        recipe = extract_recipe(result.snippet)
        if recipe:
            return BestRecipe(title=result.title, recipe=recipe)
    return None


def extract_ingredients(snippet: str, limit: int = 6) -> list[str]:
    """Ingredient list for comment prompts, split on newlines and commas."""
    match = _INGREDIENTS_LOOSE.search(snippet or "")
    if not match:
        return list(DEFAULT_INGREDIENTS)

    items = []
    for part in re.split(r"\n|,", match.group(1)):
        item = _LIST_MARKER.sub("", part).strip().rstrip(".").strip()
        if len(item) > 2:
            items.append(item)
    return items[:limit] or list(DEFAULT_INGREDIENTS)
