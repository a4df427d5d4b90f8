"""Tests for schema models."""

from mixologist.schema import (
    CacheEntry,
    Category,
    EnhancedComment,
    ImageDetection,
    NormalizedResult,
    PairingItem,
    RecipeItem,
    SearchResponse,
)


def test_recipe_item_all_none():
    """RecipeItem with no data should work."""
    item = RecipeItem.model_validate({})
    assert item.title is None
    assert item.snippet is None
    assert item.file_path is None
    assert item.has_upgrade is None


def test_recipe_item_accepts_either_file_path_spelling():
    assert RecipeItem.model_validate({"filePath": "a.md"}).file_path == "a.md"
    assert RecipeItem.model_validate({"file_path": "b.md"}).file_path == "b.md"


def test_recipe_item_coerces_loose_values():
    item = RecipeItem.model_validate(
        {"id": 12, "title": "  Gimlet ", "snippet": "", "why": {"nested": True}, "hasUpgrade": "yes", "glass": "coupe"}
    )

    assert item.id == "12"
    assert item.title == "Gimlet"
    assert item.snippet is None
    assert item.why is None
    assert item.has_upgrade is None
    assert item.model_extra == {"glass": "coupe"}


def test_pairing_item_coerces_pairings():
    item = PairingItem.model_validate(
        {"winePairing": "Barolo", "spiritPairing": {"name": "", "notes": "x"}, "beerPairing": 3}
    )

    assert item.wine_pairing.name == "Barolo"
    assert item.wine_pairing.notes == ""
    assert item.spirit_pairing is None
    assert item.beer_pairing is None


def test_normalized_result_wire_format():
    result = NormalizedResult(
        id="1",
        title="Negroni",
        snippet="Ingredients: gin",
        enhanced_comment=EnhancedComment(text="Bitter is better.", show_upgrade_button=True),
    )

    data = result.model_dump(by_alias=True, exclude_none=True)

    assert data == {
        "id": "1",
        "title": "Negroni",
        "snippet": "Ingredients: gin",
        "enhancedComment": {"text": "Bitter is better.", "showUpgradeButton": True},
    }


def test_search_response_serializes_category_value():
    response = SearchResponse(results=[], category=Category.FOOD)
    data = response.model_dump(by_alias=True, mode="json")

    assert data["category"] == "Food"
    assert data["formattedRecipe"] is None
    assert data["cached"] is False


def test_cache_entry_defaults_created_at():
    entry = CacheEntry(query="margarita", results=[])
    assert entry.created_at.tzinfo is not None


def test_image_detection_defaults_and_coercion():
    assert ImageDetection.model_validate({}).detected is False

    detection = ImageDetection.model_validate(
        {"detected": True, "itemType": "FOOD", "item": "Tacos", "confidence": "0.7"}
    )
    assert detection.item_type == "food"
    assert detection.confidence == 0.7

    odd = ImageDetection.model_validate({"detected": True, "itemType": "car", "confidence": "high"})
    assert odd.item_type is None
    assert odd.confidence == 0.0
