"""Conversion of FDC nutrient tables into scaled nutrition values."""

import math
from collections.abc import Iterable, Mapping

from nutrition_resolver.domain.nutrition import (
    FoodRecord,
    NutrientSample,
    NutritionInfo,
)

# FDC nutrient numbers; amounts are reported per 100 g.
MACRO_CODES = {
    "protein": 203,
    "fat": 204,
    "carbs": 205,
    "calories": 208,
    "sugar": 269,
    "fiber": 291,
    "sodium": 307,
}

VITAMIN_CODES = {
    "A": 318,  # RAE
    "C": 401,
    "D": 324,
    "E": 323,
    "K": 430,
    "B1": 404,  # thiamin
    "B2": 405,  # riboflavin
    "B3": 406,  # niacin
    "B6": 415,
    "B12": 418,
    "Folate": 417,
}

MINERAL_CODES = {
    "Calcium": 301,
    "Iron": 303,
    "Magnesium": 304,
    "Phosphorus": 305,
    "Potassium": 306,
    "Zinc": 309,
    "Copper": 312,
    "Manganese": 315,
    "Selenium": 317,
}


# FDC accepts at most 25 numbers in the detail "nutrients" filter.
MAX_REQUESTED_NUTRIENTS = 25

# Trace minerals left out of the filter to stay within that limit.
UNREQUESTED_CODES = frozenset({MINERAL_CODES["Copper"], MINERAL_CODES["Manganese"]})


def requested_nutrient_codes() -> list[int]:
    """Return the nutrient numbers to request from FDC, sorted."""
    codes = {
        *MACRO_CODES.values(),
        *VITAMIN_CODES.values(),
        *MINERAL_CODES.values(),
    } - UNREQUESTED_CODES
    return sorted(codes)


def amount_for(nutrients: Iterable[NutrientSample], code: int) -> float:
    """Return the amount of the first sample with ``code``, or 0.0."""
    for sample in nutrients:
        if sample.code == code:
            return sample.amount
    return 0.0


def _scaled_present(
    nutrients: tuple[NutrientSample, ...], codes: Mapping[str, int], scale: float
) -> dict[str, float]:
    values: dict[str, float] = {}
    for name, code in codes.items():
        value = amount_for(nutrients, code) * scale
        if value > 0:
            values[name] = value
    return values


def extract(record: FoodRecord, weight_grams: float) -> NutritionInfo:
    """Scale a food record's per-100 g nutrients to ``weight_grams``."""
    if not math.isfinite(weight_grams) or weight_grams < 0:
        raise ValueError(f"Invalid serving weight: {weight_grams}")
    scale = weight_grams / 100.0
    nutrients = record.nutrients

    def macro(name: str) -> float:
        return amount_for(nutrients, MACRO_CODES[name]) * scale

    return NutritionInfo(
        calories=macro("calories"),
        protein=macro("protein"),
        carbs=macro("carbs"),
        fat=macro("fat"),
        fiber=macro("fiber"),
        sugar=macro("sugar"),
        sodium=macro("sodium"),
        serving_size=weight_grams,
        vitamins=_scaled_present(nutrients, VITAMIN_CODES, scale),
        minerals=_scaled_present(nutrients, MINERAL_CODES, scale),
    )
