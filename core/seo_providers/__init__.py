"""
ContentEngine - Proveedores SEO externos.
"""
import logging
from typing import Optional

import httpx

from config import Settings, get_settings
from core.seo_providers.base import (
    SEOProvider,
    KeywordMetric,
    ProviderContentAnalysis,
    CompetitorResult,
    CompetitionLevel,
    KeywordTrend,
    fallback_keyword_metric,
    default_keyword_suggestions,
)
from core.seo_providers.serpapi import SerpAPIProvider
from core.seo_providers.mock import MockSEOProvider

logger = logging.getLogger(__name__)


def create_seo_provider(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> SEOProvider:
    """
    Selecciona el proveedor según configuración.

    Sin SERPAPI_API_KEY el resultado es MockSEOProvider (modo degradado),
    nunca un error.

    Raises:
        ValueError: Si seo_tool no es un proveedor conocido.
    """
    settings = settings or get_settings()
    tool = settings.seo_tool.lower()

    if tool == "mock":
        return MockSEOProvider()

    if tool == "serpapi":
        if not settings.serpapi_api_key:
            logger.warning(
                "SERPAPI_API_KEY no configurada. El proveedor SEO corre en modo MOCK "
                "hasta que se configure una key real."
            )
            return MockSEOProvider()
        return SerpAPIProvider(
            api_key=settings.serpapi_api_key,
            base_url=settings.serpapi_base_url,
            timeout=settings.seo_request_timeout,
            client=client,
        )

    raise ValueError(f"Proveedor SEO desconocido: {settings.seo_tool}")


__all__ = [
    "SEOProvider", "KeywordMetric", "ProviderContentAnalysis", "CompetitorResult",
    "CompetitionLevel", "KeywordTrend", "fallback_keyword_metric",
    "default_keyword_suggestions", "SerpAPIProvider", "MockSEOProvider",
    "create_seo_provider",
]
