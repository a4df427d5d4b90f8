"""Data models for mixologist."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

FallbackKind = Literal["food", "liquor", "general"]
RecipeType = Literal["classic", "elevate"]
UpgradeType = Literal["seasonal", "spicy", "premium", "festive"]


class Category(str, Enum):
    """Classification bucket assigned to a user query."""

    CLASSIC_COCKTAIL = "ClassicCocktail"
    SHOOTER = "Shooter"
    FLAVORED_LIQUOR = "FlavoredLiquor"
    FOOD = "Food"
    LIQUOR = "Liquor"
    GENERIC_COCKTAIL = "GenericCocktail"
    FOOD_PAIRING_QUERY = "FoodPairingQuery"

    @property
    def is_special(self) -> bool:
        """Special categories never read from or write to the result cache."""
        return self not in (Category.CLASSIC_COCKTAIL, Category.GENERIC_COCKTAIL)

    @property
    def fallback_kind(self) -> FallbackKind:
        if self in (Category.FOOD, Category.FOOD_PAIRING_QUERY):
            return "food"
        if self in (Category.LIQUOR, Category.FLAVORED_LIQUOR, Category.SHOOTER):
            return "liquor"
        return "general"


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _text_or_none(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


class Pairing(CamelModel):
    """A single beverage pairing for a dish."""

    name: str
    notes: str = ""


class RecipeItem(CamelModel):
    """A recipe-shaped object as the model returned it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str | None = None
    title: str | None = None
    snippet: str | None = None
    file_path: str | None = None
    why: str | None = None
    has_upgrade: bool | None = None
    type: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _merge_file_path(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("filePath") and data.get("file_path"):
            data = {**data, "filePath": data["file_path"]}
            data.pop("file_path")
        return data

    @field_validator("id", "title", "snippet", "file_path", "why", "type", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _text_or_none(value)

    @field_validator("has_upgrade", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool | None:
        return value if isinstance(value, bool) else None


class PairingItem(RecipeItem):
    """A food-pairing object carrying wine, spirit and beer sub-objects."""

    wine_pairing: Pairing | None = None
    spirit_pairing: Pairing | None = None
    beer_pairing: Pairing | None = None

    @field_validator("wine_pairing", "spirit_pairing", "beer_pairing", mode="before")
    @classmethod
    def _coerce_pairing(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"name": value} if value.strip() else None
        if isinstance(value, dict):
            name = _text_or_none(value.get("name"))
            if not name:
                return None
            return {"name": name, "notes": _text_or_none(value.get("notes")) or ""}
        return None


class EnhancedComment(CamelModel):
    """Short bartender line shown under a recipe."""

    text: str
    show_upgrade_button: bool = False


class NormalizedResult(CamelModel):
    """Stable, field-complete recommendation consumed by the UI."""

    id: str
    title: str
    file_path: str | None = None
    snippet: str
    why: str | None = None
    has_upgrade: bool | None = None
    enhanced_comment: EnhancedComment | None = None
    wine_pairing: Pairing | None = None
    spirit_pairing: Pairing | None = None
    beer_pairing: Pairing | None = None


class BestRecipe(CamelModel):
    """Formatted ingredients and steps of the most complete result."""

    title: str
    recipe: str


class SearchResponse(CamelModel):
    """Results of a text search."""

    results: list[NormalizedResult]
    formatted_recipe: BestRecipe | None = None
    category: Category
    cached: bool = False


class CacheEntry(CamelModel):
    """Cached search results keyed by the lowercased query."""

    query: str
    results: list[NormalizedResult]
    formatted_recipe: BestRecipe | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ShooterPair(CamelModel):
    """A shooter and a full cocktail built around one liquor."""

    shooter: NormalizedResult
    cocktail: NormalizedResult


class ImageDetection(CamelModel):
    """What the vision model saw in an uploaded photo."""

    detected: bool = False
    item_type: Literal["liquor", "food"] | None = None
    item: str | None = None
    category: str | None = None
    flavor: str | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    details: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_liquor_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("item") and data.get("liquorType"):
            data = {**data, "item": data["liquorType"]}
            if not data.get("itemType"):
                data["itemType"] = "liquor"
        return data

    @field_validator("item", "category", "flavor", "details", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _text_or_none(value)

    @field_validator("item_type", mode="before")
    @classmethod
    def _coerce_item_type(cls, value: Any) -> str | None:
        text = (_text_or_none(value) or "").lower()
        return text if text in {"liquor", "food"} else None

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        return max(0.0, min(1.0, number))


class ImageSearchResult(CamelModel):
    """Outcome of the photo flow: a recipe pair for liquor, pairings for food."""

    success: bool
    detected_item: str | None = None
    item_type: Literal["liquor", "food"] | None = None
    shooter: NormalizedResult | None = None
    cocktail: NormalizedResult | None = None
    pairings: list[NormalizedResult] = Field(default_factory=list)
    error: str | None = None


class UpgradeResult(CamelModel):
    """An upgraded take on a previously suggested cocktail."""

    original_query: str
    upgrade_type: UpgradeType
    title: str
    snippet: str
    why: str
    enhanced_comment: EnhancedComment
    supports_upgrade: bool = True
