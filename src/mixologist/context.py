"""Calendar and randomness inputs for prompt templates."""

import random
from dataclasses import dataclass
from datetime import date

from mixologist.lexicon import FLAVORED_SPIRITS, SEASONAL_JUICES, SPECIALTY_LIQUEURS

BOLD_THEME = "Bold"
PINK_THEME = "Pink October (Breast Cancer Awareness)"

# (month, first day, last day, theme); checked in order.
_DATED_THEMES = (
    (2, 1, 14, "Valentine's Day"),
    (5, 5, 14, "Mother's Day"),
    (6, 12, 21, "Father's Day"),
    (8, 29, 31, "Labor Day"),
    (9, 1, 7, "Labor Day"),
    (10, 24, 31, "Halloween"),
    (12, 1, 31, "Christmas"),
)


def get_season(month: int) -> str:
    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    if 9 <= month <= 11:
        return "fall"
    return "winter"


def get_theme(today: date, rng: random.Random | None = None) -> str:
    for month, first, last, theme in _DATED_THEMES:
        if today.month == month and first <= today.day <= last:
            return theme
    if today.month == 10:
        return PINK_THEME if (rng or random).random() < 0.5 else BOLD_THEME
    return BOLD_THEME


@dataclass(frozen=True)
class PromptContext:
    season: str
    theme: str
    seed: int
    seasonal_juice: str
    flavored_spirit: str
    specialty_liqueur: str

    @classmethod
    def current(cls, today: date | None = None, rng: random.Random | None = None) -> "PromptContext":
        """Build a context for `today` (defaults to the local date)."""
        today = today or date.today()
        rng = rng or random.Random()
        season = get_season(today.month)
        return cls(
            season=season,
            theme=get_theme(today, rng),
            seed=rng.randint(0, 999),
            seasonal_juice=rng.choice(SEASONAL_JUICES[season]),
            flavored_spirit=rng.choice(FLAVORED_SPIRITS),
            specialty_liqueur=rng.choice(SPECIALTY_LIQUEURS),
        )
