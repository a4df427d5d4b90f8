"""Tests for recipe-text extraction."""

from mixologist.recipe_text import DEFAULT_INGREDIENTS, extract_best_recipe, extract_ingredients, extract_recipe
from mixologist.schema import NormalizedResult


def test_extract_recipe_inline():
    snippet = "Ingredients: 2 oz gin, 1 oz Campari. Instructions: Stir with ice."

    assert extract_recipe(snippet) == "Ingredients\n2 oz gin, 1 oz Campari.\n\nSteps\nStir with ice."


def test_extract_recipe_strips_list_markers():
    snippet = "ingredients:\n- 2 oz gin\n* 0.75 oz lime juice\n\nInstructions:\n1. Shake hard\n2) Double strain"

    assert extract_recipe(snippet) == (
        "Ingredients\n2 oz gin\n0.75 oz lime juice\n\nSteps\nShake hard\nDouble strain"
    )


def test_extract_recipe_needs_both_sections():
    assert extract_recipe("Ingredients: 2 oz gin") is None
    assert extract_recipe("Instructions: stir") is None
    assert extract_recipe("") is None


def test_extract_best_recipe_picks_first_complete():
    results = [
        NormalizedResult(id="1", title="Vague", snippet="A nice drink."),
        NormalizedResult(id="2", title="Gimlet", snippet="Ingredients: 2 oz gin. Instructions: Shake."),
        NormalizedResult(id="3", title="Later", snippet="Ingredients: rum. Instructions: Stir."),
    ]

    best = extract_best_recipe(results)

    assert best is not None
    assert best.title == "Gimlet"
    assert best.recipe == "Ingredients\n2 oz gin.\n\nSteps\nShake."


def test_extract_best_recipe_none():
    assert extract_best_recipe([NormalizedResult(id="1", title="x", snippet="y")]) is None
    assert extract_best_recipe([]) is None


def test_extract_ingredients():
    snippet = "Ingredients: 2 oz gin, 1 oz Campari, 1 oz sweet vermouth. Instructions: Stir."

    assert extract_ingredients(snippet) == ["2 oz gin", "1 oz Campari", "1 oz sweet vermouth"]


def test_extract_ingredients_limit_and_defaults():
    snippet = "Ingredients: gin, rum, lime, mint, sugar, soda, salt, bitters. Method: mix"

    assert extract_ingredients(snippet) == ["gin", "rum", "lime", "mint", "sugar", "soda"]
    assert extract_ingredients("no list here") == DEFAULT_INGREDIENTS
    assert extract_ingredients("Ingredients: . Instructions: go") == DEFAULT_INGREDIENTS
