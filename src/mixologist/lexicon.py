"""Known drinks, foods and spirits, with the predicates the classifier uses."""

import re

CLASSIC_COCKTAILS = (
    "moscow mule", "old fashioned", "manhattan", "martini", "margarita",
    "mojito", "daiquiri", "whiskey sour", "cosmopolitan", "mai tai",
    "pina colada", "bloody mary", "mimosa", "negroni", "aperol spritz",
    "gin and tonic", "vodka tonic", "rum and coke", "cuba libre",
    "long island iced tea", "amaretto sour", "white russian", "black russian",
    "screwdriver", "tom collins", "john collins", "mint julep", "sazerac",
)

SHOOTER_NAMES = (
    "kamikaze", "b-52", "b52", "jager bomb", "jagerbomb", "lemon drop shot",
    "buttery nipple", "slippery nipple", "washington apple", "green tea shot",
    "baby guinness", "pickleback", "tequila slammer", "alabama slammer",
    "liquid cocaine", "mind eraser", "redheaded slut", "surfer on acid",
)

FOOD_ITEMS = frozenset(
    {
        # Meats
        "steak", "rib", "ribs", "chicken", "pork", "beef", "lamb", "duck", "brisket",
        "bacon", "filet mignon", "ribeye", "sirloin", "prime rib",
        # Seafood
        "salmon", "tuna", "shrimp", "lobster", "crab", "oysters", "scallops", "fish",
        # Dishes
        "pho", "butter chicken", "curry", "sushi", "tacos", "paella", "pasta",
        "ramen", "tikka masala", "pad thai", "biryani", "risotto", "enchiladas",
        # Sides and vegetables
        "potatoes", "asparagus", "brussels sprouts", "mushrooms", "broccoli", "carrots",
        "corn", "spinach", "kale", "zucchini", "eggplant", "cauliflower",
        # Desserts
        "chocolate", "cheesecake", "tiramisu", "ice cream", "cake", "pie", "cookies",
        "brownies", "pudding", "custard", "tart", "pastry", "donut", "éclair",
        # Everyday
        "burger", "pizza", "burrito", "soup", "salad", "sandwich", "rice", "noodles",
        "bread", "vegetable", "fruit", "cheese",
        # Cuisines
        "mexican", "italian", "japanese", "chinese", "indian", "thai", "french",
        # Meals
        "breakfast", "lunch", "dinner", "appetizer", "dessert", "snack",
    }
)

FOOD_KEYWORDS = ("recipe", "dish", "food", "meal", "cook", "eat")

LIQUOR_TYPES = frozenset(
    {
        "vodka", "rum", "gin", "tequila", "whiskey", "scotch", "bourbon",
        "brandy", "cognac", "mezcal", "vermouth", "amaro", "liqueur", "prosecco",
        "irish whiskey", "canadian whisky", "japanese whisky", "rye whiskey",
        "blended whisky", "single malt", "tennessee whiskey",
        "sake", "soju", "shochu", "baijiu", "umeshu", "makgeolli",
        "cachaca", "pisco", "grappa", "aquavit", "absinthe", "ouzo", "raki",
        "sambuca", "calvados", "eau de vie", "armagnac", "fernet",
        "port", "sherry", "madeira", "marsala",
        "amaretto", "baileys", "triple sec", "cointreau", "chambord", "chartreuse",
        "drambuie", "frangelico", "grand marnier", "kahlua", "midori", "limoncello",
        "st germain", "campari", "aperol",
        "flavored vodka", "spiced rum", "flavored gin", "infused tequila",
        "irish cream", "rum cream", "crème liqueur",
        "premixed cocktail", "canned cocktail", "hard seltzer", "cooler",
        "bitters", "aperitif", "digestif", "schnapps", "curacao", "cordial",
    }
)

FLAVORED_LIQUORS = (
    "crown peach", "smirnoff peach", "fireball", "crown apple",
    "smirnoff vanilla", "absolut citron", "grey goose cherry noir",
    "baileys", "kahlua", "sambuca", "hypnotiq", "goldschlager",
    "malibu coconut", "captain morgan spiced", "bacardi vanilla",
    "rumchata", "jagermeister", "peach schnapps", "x-rated", "three olives",
)

_FLAVORS = (
    "peach|apple|vanilla|cherry|cinnamon|coconut|raspberry|strawberry|blueberry"
    "|watermelon|pineapple|mango|honey|caramel|banana|orange"
)

FLAVORED_PATTERNS = (
    # brand + flavor
    re.compile(
        r"\b(crown|smirnoff|absolut|grey goose|captain morgan|jose cuervo|jack daniels"
        r"|jim beam|jameson|bacardi|malibu)\s+(lime|citrus|" + _FLAVORS + r")",
        re.IGNORECASE,
    ),
    # named flavored spirits
    re.compile(r"\b(fireball|goldschlager|sambuca|hypnotiq|hpnotiq)\b", re.IGNORECASE),
    # flavor + base spirit
    re.compile(r"\b(" + _FLAVORS + r")\s+(vodka|whiskey|whisky|rum|tequila|gin|schnapps)", re.IGNORECASE),
    # cream liqueurs
    re.compile(r"\b(baileys|kahlua|amaretto|frangelico|sambuca)\b", re.IGNORECASE),
    # flavored rums
    re.compile(r"\b(captain morgan|bacardi|malibu)\s+(spiced|coconut|vanilla|cherry|pineapple)", re.IGNORECASE),
    # flavored vodkas
    re.compile(
        r"\b(absolut|smirnoff|grey goose|titos|pinnacle)\s+(citron|vanilla|cherry|raspberry|peach|apple|coconut)",
        re.IGNORECASE,
    ),
)

SHOOTER_PATTERN = re.compile(r"\b(shooters?|shots?)\b", re.IGNORECASE)

# Example ingredients sprinkled into prompts for variety.
SEASONAL_JUICES = {
    "spring": ("strawberry puree", "rhubarb syrup", "elderflower cordial", "fresh grapefruit juice"),
    "summer": ("watermelon juice", "peach nectar", "pineapple juice", "fresh lime juice"),
    "fall": ("apple cider", "pear nectar", "cranberry juice", "pomegranate juice"),
    "winter": ("blood orange juice", "pomegranate juice", "spiced cranberry juice", "clementine juice"),
}

FLAVORED_SPIRITS = (
    "vanilla vodka", "strawberry vodka", "coconut rum", "spiced rum",
    "cinnamon whiskey", "honey bourbon", "peach schnapps", "cherry vodka",
    "apple whiskey", "raspberry vodka", "mango rum", "pineapple vodka",
)

SPECIALTY_LIQUEURS = (
    "triple sec", "blue curacao", "chambord", "midori", "st germain",
    "amaretto", "southern comfort", "frangelico", "limoncello", "aperol",
)


def _normalize(query: str) -> str:
    return " ".join(query.lower().split())


def is_classic_cocktail(query: str) -> bool:
    normalized = _normalize(query)
    return any(
        normalized == name
        or normalized == f"{name} recipe"
        or normalized.startswith(f"{name} ")
        or normalized.endswith(f" {name}")
        for name in CLASSIC_COCKTAILS
    )


def is_shooter_query(query: str) -> bool:
    normalized = _normalize(query)
    if SHOOTER_PATTERN.search(normalized):
        return True
    return any(re.search(rf"\b{re.escape(name)}\b", normalized) for name in SHOOTER_NAMES)


def is_food_item(query: str) -> bool:
    normalized = _normalize(query)
    return normalized in FOOD_ITEMS or any(keyword in normalized for keyword in FOOD_KEYWORDS)


def is_flavored_liquor(query: str) -> bool:
    normalized = _normalize(query)
    if any(brand in normalized for brand in FLAVORED_LIQUORS):
        return True
    return any(pattern.search(normalized) for pattern in FLAVORED_PATTERNS)


def is_liquor_type(query: str) -> bool:
    return _normalize(query) in LIQUOR_TYPES
