"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from nutrition_resolver.adapters.fdc_client import FdcClient
from nutrition_resolver.config import Settings
from nutrition_resolver.containers import AppContainer
from nutrition_resolver.domain.nutrition import (
    FoodRecord,
    NutrientSample,
    SearchCandidate,
)
from nutrition_resolver.domain.outcome import Outcome
from nutrition_resolver.services.cache import TtlCache
from nutrition_resolver.services.nutrition import NutritionService


def banana_record(fdc_id: int = 1105314) -> FoodRecord:
    return FoodRecord(
        fdc_id=fdc_id,
        description="Banana, raw",
        data_type="Foundation",
        nutrients=(
            NutrientSample(code=208, amount=89.0, unit="kcal", name="Energy"),
            NutrientSample(code=203, amount=1.09, unit="g", name="Protein"),
            NutrientSample(code=204, amount=0.33, unit="g", name="Total lipid (fat)"),
            NutrientSample(code=205, amount=22.84, unit="g", name="Carbohydrate"),
            NutrientSample(code=269, amount=12.23, unit="g", name="Sugars, total"),
            NutrientSample(code=291, amount=2.6, unit="g", name="Fiber"),
            NutrientSample(code=307, amount=1.0, unit="mg", name="Sodium, Na"),
            NutrientSample(code=401, amount=8.7, unit="mg", name="Vitamin C"),
            NutrientSample(code=324, amount=0.0, unit="IU", name="Vitamin D"),
            NutrientSample(code=306, amount=358.0, unit="mg", name="Potassium, K"),
        ),
    )


@dataclass
class FakeClock:
    """Clock that only moves when told to."""

    now: datetime = field(default_factory=lambda: datetime(2024, 1, 1, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with canned results and call counters."""

    candidates: list[SearchCandidate] = field(
        default_factory=lambda: [
            SearchCandidate(
                fdc_id=1105314,
                description="Banana, raw",
                data_type="Foundation",
            )
        ]
    )
    records: dict[int, FoodRecord] = field(
        default_factory=lambda: {1105314: banana_record()}
    )
    search_calls: int = 0
    detail_calls: int = 0
    search_failures: int = 0

    async def search(self, query: str) -> list[SearchCandidate]:
        return (await self.search_outcome(query)).unwrap_or([])

    async def search_outcome(self, query: str) -> Outcome[list[SearchCandidate]]:
        self.search_calls += 1
        if self.search_failures:
            self.search_failures -= 1
            return Outcome.missing("timeout")
        return Outcome.found(list(self.candidates))

    async def fetch_detail(self, fdc_id: int) -> FoodRecord | None:
        self.detail_calls += 1
        return self.records.get(fdc_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        fdc_api_key="fdc-key",
        fdc_base_url="https://api.test",
        admin_token="admin-token",
    )


@pytest.fixture
def banana() -> FoodRecord:
    return banana_record()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def nutrition_service(fdc_client: FakeFdcClient, clock: FakeClock) -> NutritionService:
    return NutritionService(
        fdc_client=fdc_client,
        cache=TtlCache(clock=clock),
        api_key="fdc-key",
    )


@pytest.fixture
def container(settings: Settings, nutrition_service: NutritionService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
