"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_resolver.adapters.fdc_client import HttpxFdcClient
from nutrition_resolver.config import Settings, normalize_api_key
from nutrition_resolver.services.cache import TtlCache
from nutrition_resolver.services.nutrition import NutritionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_key = normalize_api_key(resolved_settings.fdc_api_key)
    fdc_client = HttpxFdcClient.create(
        api_key=api_key or "",
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.fdc_timeout_seconds,
        page_size=resolved_settings.fdc_page_size,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=TtlCache(),
        api_key=api_key,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
