"""Query classification."""

import logging

from mixologist import lexicon
from mixologist.schema import Category

logger = logging.getLogger(__name__)


def classify(query: str) -> Category:
    """Assign exactly one category to a raw user query.

    Checks run in a fixed order and the first match wins: classic cocktail,
    shooter, food, flavored liquor, plain liquor. Anything else is a generic
    cocktail request.
    """
    if lexicon.is_classic_cocktail(query):
        category = Category.CLASSIC_COCKTAIL
    elif lexicon.is_shooter_query(query):
        category = Category.SHOOTER
    elif lexicon.is_food_item(query):
        category = Category.FOOD
    elif lexicon.is_flavored_liquor(query):
        category = Category.FLAVORED_LIQUOR
    elif lexicon.is_liquor_type(query):
        category = Category.LIQUOR
    else:
        category = Category.GENERIC_COCKTAIL

    logger.debug("classified query %r as %s", query, category.value)
    return category
