"""USDA FoodData Central API client."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from nutrition_resolver.adapters.fdc_models import FdcFoodResponse, FdcSearchResponse
from nutrition_resolver.domain.nutrition import FoodRecord, SearchCandidate
from nutrition_resolver.domain.outcome import Outcome
from nutrition_resolver.services.extraction import requested_nutrient_codes

SEARCH_DATA_TYPES = ["Foundation", "SR Legacy", "Survey (FNDDS)"]

_logger = logging.getLogger(__name__)


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search(self, query: str) -> list[SearchCandidate]:
        """Search foods by query; empty on any failure."""

    async def search_outcome(self, query: str) -> Outcome[list[SearchCandidate]]:
        """Search foods; a missing outcome means the request itself failed."""

    async def fetch_detail(self, fdc_id: int) -> FoodRecord | None:
        """Fetch a food by FDC id; None on any failure."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client that never raises to its caller."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0
    page_size: int = 10
    nutrient_codes: list[int] = field(default_factory=requested_nutrient_codes)

    @classmethod
    def create(
        cls,
        api_key: str,
        base_url: str,
        timeout_seconds: float = 15.0,
        page_size: int = 10,
    ) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
            page_size=page_size,
        )

    async def search(self, query: str) -> list[SearchCandidate]:
        """Search foods by query."""
        outcome = await self.search_outcome(query)
        if not outcome.ok:
            _logger.warning(
                "FDC search failed: query=%r reason=%s", query, outcome.reason
            )
        return outcome.unwrap_or([])

    async def fetch_detail(self, fdc_id: int) -> FoodRecord | None:
        """Fetch a food by FDC id."""
        outcome = await self.detail_outcome(fdc_id)
        if not outcome.ok:
            _logger.warning(
                "FDC detail failed: fdc_id=%s reason=%s", fdc_id, outcome.reason
            )
        return outcome.unwrap_or(None)

    async def search_outcome(self, query: str) -> Outcome[list[SearchCandidate]]:
        """Search foods and report why nothing came back, if so."""
        if not query.strip():
            return Outcome.found([])
        try:
            response = await self.http_client.post(
                f"{self.base_url}/foods/search",
                headers={"X-Api-Key": self.api_key},
                json={
                    "query": query,
                    "dataType": SEARCH_DATA_TYPES,
                    "pageSize": self.page_size,
                    "pageNumber": 1,
                    "sortBy": "dataType.keyword",
                    "sortOrder": "asc",
                },
                timeout=self.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            return Outcome.missing(f"timeout: {exc}")
        except httpx.HTTPError as exc:
            return Outcome.missing(f"transport error: {exc}")
        if not response.is_success:
            return Outcome.missing(_status_reason(response))
        try:
            payload = FdcSearchResponse.model_validate(response.json())
        except ValueError as exc:
            return Outcome.missing(f"malformed search payload: {exc}")
        return Outcome.found(payload.to_domain())

    async def detail_outcome(self, fdc_id: int) -> Outcome[FoodRecord]:
        """Fetch food details and report why nothing came back, if so."""
        try:
            response = await self.http_client.get(
                f"{self.base_url}/food/{fdc_id}",
                params={
                    "api_key": self.api_key,
                    "format": "abridged",
                    "nutrients": ",".join(str(code) for code in self.nutrient_codes),
                },
                timeout=self.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            return Outcome.missing(f"timeout: {exc}")
        except httpx.HTTPError as exc:
            return Outcome.missing(f"transport error: {exc}")
        if not response.is_success:
            return Outcome.missing(_status_reason(response))
        try:
            payload = FdcFoodResponse.model_validate(response.json())
        except ValueError as exc:
            return Outcome.missing(f"malformed food payload: {exc}")
        if payload.fdc_id != fdc_id:
            return Outcome.missing(f"fdcId mismatch: got {payload.fdc_id}")
        return Outcome.found(payload.to_domain())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _status_reason(response: httpx.Response) -> str:
    """Describe a non-2xx response with a truncated body."""
    return f"status={response.status_code} body={response.text[:200]!r}"
