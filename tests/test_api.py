"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from api.index import app
from mixologist.exceptions import ImageError
from mixologist.schema import (
    Category,
    EnhancedComment,
    ImageSearchResult,
    NormalizedResult,
    SearchResponse,
    UpgradeResult,
)

client = TestClient(app)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")


def _response():
    return SearchResponse(
        results=[NormalizedResult(id="gemini-result-0-1", title="Classic Margarita", snippet="Ingredients: tequila")],
        category=Category.CLASSIC_COCKTAIL,
    )


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_search_requires_query(api_key):
    response = client.get("/search")
    assert response.status_code == 400


def test_search_requires_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    response = client.get("/search", params={"q": "margarita"})

    assert response.status_code == 500
    assert response.json()["detail"] == "API key for search service is not configured."


def test_search_treats_blank_api_key_as_missing(monkeypatch, mocker):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    search = mocker.patch("api.index.search", new=mocker.AsyncMock(return_value=_response()))

    response = client.get("/search", params={"q": "margarita"})

    assert response.status_code == 500
    search.assert_not_called()


def test_search_get(api_key, mocker):
    search = mocker.patch("api.index.search", new=mocker.AsyncMock(return_value=_response()))

    response = client.get("/search", params={"q": "margarita"})

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "ClassicCocktail"
    assert body["results"][0]["title"] == "Classic Margarita"
    assert "filePath" in body["results"][0]
    assert "formattedRecipe" in body
    search.assert_awaited_once_with("margarita", "test-key", None)


def test_search_post_query(api_key, mocker):
    mocker.patch("api.index.search", new=mocker.AsyncMock(return_value=_response()))

    response = client.post("/search", json={"query": "margarita"})

    assert response.status_code == 200
    assert response.json()["results"][0]["id"] == "gemini-result-0-1"


def test_search_post_image(api_key, mocker):
    result = ImageSearchResult(success=False, error="Nothing recognizable")
    mocker.patch("api.index.search_image", new=mocker.AsyncMock(return_value=result))

    response = client.post("/search", json={"image": "data:image/png;base64,aGVsbG8="})

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["error"] == "Nothing recognizable"


def test_search_post_invalid_image(api_key, mocker):
    mocker.patch("api.index.search_image", new=mocker.AsyncMock(side_effect=ImageError("Failed to open image")))

    response = client.post("/search", json={"image": "aGVsbG8="})

    assert response.status_code == 400


def test_search_post_empty_image(api_key):
    response = client.post("/search", json={"image": "  "})
    assert response.status_code == 400


def test_comment(api_key, mocker):
    comment = EnhancedComment(text="Salt the rim.", show_upgrade_button=True)
    generate = mocker.patch("api.index.generate_comment", new=mocker.AsyncMock(return_value=comment))

    response = client.post(
        "/comment",
        json={"title": "Margarita", "ingredients": ["2 oz tequila"], "season": "summer", "recipeType": "classic"},
    )

    assert response.status_code == 200
    assert response.json() == {"text": "Salt the rim.", "showUpgradeButton": True}
    generate.assert_awaited_once_with("Margarita", ["2 oz tequila"], "summer", "test-key", "classic")


def test_upgrade(api_key, mocker):
    result = UpgradeResult(
        original_query="margarita",
        upgrade_type="spicy",
        title="Spicy Margarita",
        snippet="Ingredients: tequila. Instructions: Shake.",
        why="Heat.",
        enhanced_comment=EnhancedComment(text="Bring the heat."),
    )
    mocker.patch("api.index.upgrade_cocktail", new=mocker.AsyncMock(return_value=result))

    response = client.post("/upgrade", json={"originalQuery": "margarita", "upgradeType": "spicy"})

    assert response.status_code == 200
    body = response.json()
    assert body["originalQuery"] == "margarita"
    assert body["supportsUpgrade"] is True


def test_upgrade_rejects_unknown_type(api_key):
    response = client.post("/upgrade", json={"originalQuery": "margarita", "upgradeType": "frozen"})
    assert response.status_code == 422
