"""Pydantic models for FoodData Central API payloads."""

import math

from pydantic import BaseModel, ConfigDict, Field

from nutrition_resolver.domain.nutrition import (
    FoodRecord,
    NutrientSample,
    SearchCandidate,
)


def _parse_code(raw: object) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        # Some numbers are reported as "208.0".
        if text.endswith(".0"):
            text = text[:-2]
        if text.isdigit():
            return int(text)
    return None


class FdcNutrientInfo(BaseModel):
    """Nested nutrient definition used by full-format food details."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    number: str | int | None = None
    name: str | None = None
    unit_name: str | None = Field(default=None, alias="unitName")


class FdcFoodNutrient(BaseModel):
    """One nutrient row in any of the FDC response formats."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    number: str | int | None = None
    nutrient_number: str | int | None = Field(default=None, alias="nutrientNumber")
    name: str | None = None
    nutrient_name: str | None = Field(default=None, alias="nutrientName")
    amount: float | None = None
    value: float | None = None
    unit_name: str | None = Field(default=None, alias="unitName")
    nutrient: FdcNutrientInfo | None = None

    def to_domain(self) -> NutrientSample | None:
        """Return a sample, or None when the row has no usable nutrient number."""
        nested = self.nutrient or FdcNutrientInfo()
        code = _parse_code(self.number)
        if code is None:
            code = _parse_code(self.nutrient_number)
        if code is None:
            code = _parse_code(nested.number)
        if code is None:
            return None
        amount = self.amount if self.amount is not None else self.value
        if amount is None or not math.isfinite(amount) or amount < 0:
            amount = 0.0
        return NutrientSample(
            code=code,
            amount=float(amount),
            unit=self.unit_name or nested.unit_name or "",
            name=self.name or self.nutrient_name or nested.name or "",
        )


class FdcSearchFood(BaseModel):
    """A food entry inside a search response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    fdc_id: int = Field(alias="fdcId")
    description: str | None = None
    data_type: str | None = Field(default=None, alias="dataType")
    brand_owner: str | None = Field(default=None, alias="brandOwner")
    ingredients: str | None = None

    def to_domain(self) -> SearchCandidate:
        return SearchCandidate(
            fdc_id=self.fdc_id,
            description=self.description or "",
            data_type=self.data_type or "",
            brand_owner=self.brand_owner,
            ingredients=self.ingredients,
        )


class FdcSearchResponse(BaseModel):
    """Response body of ``POST /foods/search``."""

    model_config = ConfigDict(extra="ignore")

    foods: list[FdcSearchFood] = Field(default_factory=list)

    def to_domain(self) -> list[SearchCandidate]:
        return [food.to_domain() for food in self.foods]


class FdcFoodResponse(BaseModel):
    """Response body of ``GET /food/{fdcId}``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    fdc_id: int = Field(alias="fdcId")
    description: str | None = None
    data_type: str | None = Field(default=None, alias="dataType")
    food_nutrients: list[FdcFoodNutrient] = Field(
        default_factory=list, alias="foodNutrients"
    )

    def to_domain(self) -> FoodRecord:
        samples = (nutrient.to_domain() for nutrient in self.food_nutrients)
        return FoodRecord(
            fdc_id=self.fdc_id,
            description=self.description or "",
            data_type=self.data_type or "",
            nutrients=tuple(sample for sample in samples if sample is not None),
        )
