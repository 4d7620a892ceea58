"""Nutrition resolution backed by USDA FDC with caching."""

import logging
from dataclasses import dataclass

from nutrition_resolver.adapters.fdc_client import FdcClient
from nutrition_resolver.domain.nutrition import (
    FoodRecord,
    NutritionInfo,
    SearchCandidate,
)
from nutrition_resolver.domain.outcome import Outcome
from nutrition_resolver.services.cache import DETAIL_NAMESPACE, SEARCH_NAMESPACE, Cache
from nutrition_resolver.services.extraction import extract
from nutrition_resolver.services.ranking import select_best

_logger = logging.getLogger(__name__)


def normalize_query(query: str) -> str:
    """Return the cache key form of a search query."""
    return " ".join(query.lower().split())


@dataclass
class NutritionService:
    """Resolves a food name and weight into scaled nutrition values.

    Failures never propagate: every path that cannot produce a value ends in
    ``None``, with the reason logged where it was detected.
    """

    fdc_client: FdcClient
    cache: Cache
    api_key: str | None
    debug: bool = False

    async def resolve(
        self, food_name: str, weight_grams: float
    ) -> NutritionInfo | None:
        """Return nutrition for ``weight_grams`` of the best FDC match."""
        try:
            outcome = await self._resolve(food_name, weight_grams)
        except Exception:
            _logger.exception("Nutrition lookup failed for %r", food_name)
            return None
        if not outcome.ok:
            _logger.info("No nutrition for %r: %s", food_name, outcome.reason)
            return None
        return outcome.value

    get_nutrition_for_food = resolve

    def clear_expired_cache(self) -> int:
        """Sweep expired cache entries and return how many were removed."""
        removed = self.cache.sweep()
        _logger.info("Cleared %s expired FDC cache entries", removed)
        return removed

    def get_cache_stats(self) -> dict[str, int]:
        """Return cached entry counts per namespace plus a total."""
        stats = {SEARCH_NAMESPACE: 0, DETAIL_NAMESPACE: 0}
        stats.update(self.cache.stats())
        stats["total"] = sum(stats.values())
        return stats

    async def _resolve(
        self, food_name: str, weight_grams: float
    ) -> Outcome[NutritionInfo]:
        if not self.api_key:
            _logger.error("FDC API key not configured")
            return Outcome.missing("FDC API key not configured")

        candidates = await self._search(food_name)
        if not candidates:
            return Outcome.missing("no search results")

        best = select_best(candidates, food_name)
        if best is None:
            return Outcome.missing("no suitable match")

        record = await self._food_record(best.fdc_id)
        if record is None:
            return Outcome.missing(f"no details for fdc_id={best.fdc_id}")

        nutrition = extract(record, weight_grams)
        if self.debug:
            _logger.info(
                "Resolved %r to fdc_id=%s (%s)",
                food_name,
                record.fdc_id,
                record.data_type,
            )
        return Outcome.found(nutrition)

    async def _search(self, food_name: str) -> list[SearchCandidate]:
        cache_key = normalize_query(food_name)
        cached = self.cache.get(SEARCH_NAMESPACE, cache_key)
        if isinstance(cached, list):
            return cached

        outcome = await self.fdc_client.search_outcome(food_name)
        if not outcome.ok:
            _logger.warning(
                "FDC search failed: query=%r reason=%s", food_name, outcome.reason
            )
            return []
        candidates = outcome.unwrap_or([])
        # Successful empty pages are cached too, so repeated misses skip the network.
        self.cache.put(SEARCH_NAMESPACE, cache_key, candidates)
        if self.debug:
            _logger.info("FDC search: query=%s results=%s", cache_key, len(candidates))
        return candidates

    async def _food_record(self, fdc_id: int) -> FoodRecord | None:
        cached = self.cache.get(DETAIL_NAMESPACE, fdc_id)
        if isinstance(cached, FoodRecord):
            return cached

        record = await self.fdc_client.fetch_detail(fdc_id)
        if record is not None:
            self.cache.put(DETAIL_NAMESPACE, fdc_id, record)
        return record
