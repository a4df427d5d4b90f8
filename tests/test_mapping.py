"""Tests for result mapping and fallbacks."""

import random

from mixologist.mapping import (
    NO_SNIPPET,
    UNTITLED,
    fallback_results,
    fallback_shooter_pair,
    map_food_pairing,
    map_pairings,
    map_results,
    map_shooter_pair,
)
from mixologist.schema import NormalizedResult

NOW = 1_700_000_000.0


def test_map_results_fills_defaults():
    results = map_results(
        [
            {"title": "Margarita", "snippet": "Ingredients: tequila", "filePath": "x.com", "why": "classic", "hasUpgrade": True},
            {"snippet": "Ingredients: gin"},
            {"title": "Paloma"},
        ],
        "margarita",
        now=NOW,
    )

    assert [r.title for r in results] == ["Margarita", UNTITLED, "Paloma"]
    assert results[0].file_path == "x.com"
    assert results[0].why == "classic"
    assert results[0].has_upgrade is True
    assert results[1].id == "gemini-result-1-1700000000000"
    assert results[1].file_path is None
    assert results[2].snippet == NO_SNIPPET


def test_map_results_skips_unusable_items():
    results = map_results(
        [{"why": "no title or snippet"}, "a string", 42, {"title": "Mojito", "snippet": "mint"}],
        "mojito",
        now=NOW,
    )

    assert len(results) == 1
    assert results[0].title == "Mojito"
    assert results[0].id == "gemini-result-3-1700000000000"


def test_map_results_numbered_titles():
    results = map_results([{"snippet": "a"}, {"snippet": "b"}], "q", numbered_titles=True)
    assert [r.title for r in results] == ["Recommendation 1", "Recommendation 2"]


def test_map_results_keeps_model_id_and_snake_case_path():
    results = map_results([{"id": 7, "title": "Gimlet", "file_path": "gimlet.md"}], "gimlet")

    assert results[0].id == "7"
    assert results[0].file_path == "gimlet.md"


def test_map_results_serializes_camel_case():
    result = map_results([{"title": "Gimlet", "snippet": "gin", "hasUpgrade": False}], "gimlet", now=NOW)[0]
    data = result.model_dump(by_alias=True)

    assert data["filePath"] is None
    assert data["hasUpgrade"] is False
    assert "enhancedComment" in data


def _result(snippet=""):
    return NormalizedResult(id="r1", title="Pairings", snippet=snippet)


def test_map_food_pairing_uses_sub_objects():
    result = map_food_pairing(
        _result(),
        {
            "winePairing": {"name": "Malbec", "notes": "Bold tannins."},
            "spiritPairing": "Bourbon",
            "beerPairing": {"name": "Porter"},
        },
    )

    assert result.wine_pairing.name == "Malbec"
    assert result.wine_pairing.notes == "Bold tannins."
    assert result.spirit_pairing.name == "Bourbon"
    assert result.beer_pairing.name == "Porter"


def test_map_food_pairing_reads_snippet_sections():
    snippet = (
        "Wine Pairing: Malbec. Wine Notes: Bold tannins cut the fat. "
        "Spirit Pairing: Bourbon. Spirit Notes: Caramel echoes the char. "
        "Beer Pairing: Porter. Beer Notes: Roasty."
    )

    result = map_food_pairing(_result(snippet))

    assert (result.wine_pairing.name, result.wine_pairing.notes) == ("Malbec", "Bold tannins cut the fat")
    assert (result.spirit_pairing.name, result.spirit_pairing.notes) == ("Bourbon", "Caramel echoes the char")
    assert (result.beer_pairing.name, result.beer_pairing.notes) == ("Porter", "Roasty")


def test_map_food_pairing_defaults():
    result = map_food_pairing(_result("Just drink something nice."), {})

    assert result.wine_pairing.name == "Wine Selection"
    assert result.wine_pairing.notes == "Wine pairing information not available."
    assert result.spirit_pairing.name == "Spirit Selection"
    assert result.beer_pairing.name == "Beer Selection"


def test_map_pairings_keeps_raw_alignment():
    results = map_pairings(
        [
            {"why": "dropped"},
            {"title": "Steak Pairings", "snippet": "s", "winePairing": {"name": "Cabernet", "notes": "n"}},
        ],
        "steak",
    )

    assert len(results) == 1
    assert results[0].wine_pairing.name == "Cabernet"


def test_fallback_results_per_kind():
    rng = random.Random(3)
    for kind in ("food", "liquor", "general"):
        results = fallback_results("gin", kind, rng=rng)
        assert len(results) == 1
        assert "gin" in results[0].title
        assert results[0].snippet

    food = fallback_results("steak", "food")[0]
    assert food.file_path == "willowpark.net"


def test_map_shooter_pair_uses_type_tags():
    items = [
        {"type": "cocktail", "title": "Peach Sour", "snippet": "s", "filePath": None},
        {"type": "shooter", "title": "Peach Drop", "snippet": "s", "filePath": None},
    ]

    pair = map_shooter_pair(items, "crown peach")

    assert pair.shooter.title == "Peach Drop"
    assert pair.cocktail.title == "Peach Sour"


def test_map_shooter_pair_falls_back_to_positions():
    items = [
        {"title": "First", "snippet": "s", "filePath": None},
        {"title": "Second", "snippet": "s", "filePath": None},
    ]

    pair = map_shooter_pair(items, "rum")

    assert pair.shooter.title == "First"
    assert pair.cocktail.title == "Second"


def test_fallback_shooter_pair():
    pair = fallback_shooter_pair("coconut rum")

    assert pair.shooter.title == "Coconut Rum Shot"
    assert pair.cocktail.title == "Coconut Rum Sour"
    assert "0.75 oz coconut rum" in pair.shooter.snippet
