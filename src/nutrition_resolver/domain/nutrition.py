"""Nutrition domain models."""

from dataclasses import dataclass, field
from enum import IntEnum


class DataTier(IntEnum):
    """Quality score of an FDC data type; higher is more authoritative."""

    OTHER = 0
    SURVEY = 1
    SR_LEGACY = 2
    FOUNDATION = 3

    @classmethod
    def from_label(cls, label: str | None) -> "DataTier":
        """Map an FDC ``dataType`` label to its tier."""
        return _TIER_LABELS.get((label or "").strip().lower(), cls.OTHER)


_TIER_LABELS = {
    "foundation": DataTier.FOUNDATION,
    "sr legacy": DataTier.SR_LEGACY,
    "survey (fndds)": DataTier.SURVEY,
}


@dataclass(frozen=True)
class SearchCandidate:
    """One food returned by an FDC search."""

    fdc_id: int
    description: str
    data_type: str
    brand_owner: str | None = None
    ingredients: str | None = None


@dataclass(frozen=True)
class NutrientSample:
    """Nutrient amount per 100 g, keyed by the FDC nutrient number."""

    code: int
    amount: float
    unit: str = ""
    name: str = ""


@dataclass(frozen=True)
class FoodRecord:
    """Food details with the nutrients reported by FDC."""

    fdc_id: int
    description: str
    data_type: str
    nutrients: tuple[NutrientSample, ...] = ()


@dataclass(frozen=True)
class NutritionInfo:
    """Nutrition values scaled to a serving weight."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float
    sodium: float
    serving_size: float
    vitamins: dict[str, float] = field(default_factory=dict)
    minerals: dict[str, float] = field(default_factory=dict)

    @property
    def macro_percentages(self) -> dict[str, float]:
        """Share of calories coming from protein, carbs and fat."""
        if self.calories == 0:
            return {"protein": 0.0, "carbs": 0.0, "fat": 0.0}
        return {
            "protein": self.protein * 4 / self.calories * 100,
            "carbs": self.carbs * 4 / self.calories * 100,
            "fat": self.fat * 9 / self.calories * 100,
        }

    def to_dict(self) -> dict[str, object]:
        """Serialize to a JSON-compatible dict."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "sugar": self.sugar,
            "sodium": self.sodium,
            "serving_size": self.serving_size,
            "vitamins": dict(self.vitamins),
            "minerals": dict(self.minerals),
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "NutritionInfo":
        """Build from a dict produced by ``to_dict``, defaulting missing keys."""
        return cls(
            calories=float(data.get("calories") or 0.0),
            protein=float(data.get("protein") or 0.0),
            carbs=float(data.get("carbs") or 0.0),
            fat=float(data.get("fat") or 0.0),
            fiber=float(data.get("fiber") or 0.0),
            sugar=float(data.get("sugar") or 0.0),
            sodium=float(data.get("sodium") or 0.0),
            serving_size=float(
                100.0 if data.get("serving_size") is None else data["serving_size"]
            ),
            vitamins={k: float(v) for k, v in (data.get("vitamins") or {}).items()},
            minerals={k: float(v) for k, v in (data.get("minerals") or {}).items()},
        )
