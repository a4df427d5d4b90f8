"""mixologist: Cocktail, shooter and food-pairing recommendations from a generative model."""

from mixologist.cache import InMemoryCache, MongoCache
from mixologist.classifier import classify
from mixologist.core import (
    fetch_and_process_results,
    generate_comment,
    recipes_from_liquor,
    search,
    search_image,
    upgrade_cocktail,
)
from mixologist.schema import Category, NormalizedResult, SearchResponse

__version__ = "0.1.0"

__all__ = [
    "classify",
    "fetch_and_process_results",
    "generate_comment",
    "recipes_from_liquor",
    "search",
    "search_image",
    "upgrade_cocktail",
    "Category",
    "InMemoryCache",
    "MongoCache",
    "NormalizedResult",
    "SearchResponse",
    "__version__",
]
