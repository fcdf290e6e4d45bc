"""
ContentEngine - Proveedor SEO simulado (modo degradado).

Se usa cuando no hay credenciales de SerpAPI y en tests. Es determinista,
no hace red y marca is_mock = True para que nadie confunda sus valores con
mediciones reales.
"""
import logging

from core.analyzer import keyword_density, readability_score
from core.scoring import round_half_up
from core.seo_providers.base import (
    SEOProvider,
    KeywordMetric,
    ProviderContentAnalysis,
    CompetitorResult,
    fallback_keyword_metric,
    default_keyword_suggestions,
)

logger = logging.getLogger(__name__)


class MockSEOProvider(SEOProvider):
    """Proveedor sin red. Sin competidores ni recomendaciones externas."""

    nombre = "Mock SEO (modo degradado)"
    proveedor_id = "mock"
    is_mock = True

    async def get_keyword_data(self, keyword: str) -> KeywordMetric:
        logger.debug(f"[MockSEO] Keyword data por defecto: {keyword}")
        return fallback_keyword_metric(keyword)

    async def analyze_content(self, text: str, keyword: str) -> ProviderContentAnalysis:
        density = keyword_density(text, keyword)
        readability = readability_score(text)
        score = round_half_up(density * 0.3 + readability * 0.4 + 50 * 0.3)
        return ProviderContentAnalysis(
            score=min(100, score),
            keyword_density=density,
            readability=readability,
        )

    async def get_keyword_suggestions(self, seed: str) -> list[str]:
        return default_keyword_suggestions(seed)

    async def get_competitor_analysis(self, keyword: str) -> list[CompetitorResult]:
        return []
