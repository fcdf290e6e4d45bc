"""
ContentEngine - Proveedor SerpAPI.
Consulta resultados de Google vía https://serpapi.com para keywords y competidores.

Todas las llamadas tienen timeout fijo (10s por defecto). Timeout, error de
transporte, status no-2xx y JSON malformado son la MISMA clase de fallo:
SEOProviderError.
"""
import logging
import random
import re
from typing import Optional

import httpx

from core.analyzer import keyword_density, readability_score
from core.exceptions import SEOProviderError
from core.scoring import round_half_up
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

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://serpapi.com/search"
DEFAULT_TIMEOUT = 10.0

# Buckets de total_results → dificultad (monótono)
DIFFICULTY_BUCKETS = [
    (100_000_000, 85),
    (10_000_000, 70),
    (1_000_000, 55),
    (100_000, 40),
]
MIN_DIFFICULTY = 25


class SerpAPIProvider(SEOProvider):
    """
    SerpAPI: proveedor SEO de producción.

    Solo usa la búsqueda de Google de SerpAPI; volumen y CPC salen del
    answer_box cuando Google los muestra.
    """

    nombre = "SerpAPI"
    proveedor_id = "serpapi"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            api_key: API key de SerpAPI.
            base_url: Endpoint de búsqueda.
            timeout: Segundos máximos por petición.
            client: Cliente httpx compartido (si no, se abre uno por petición).
            rng: Generador para el volumen placeholder.
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._client = client
        self._rng = rng or random.Random()

    # =========================================================================
    # Transporte
    # =========================================================================

    async def _search(self, **params) -> dict:
        query = {"api_key": self.api_key, "engine": "google", **params}
        try:
            if self._client is not None:
                response = await self._client.get(self.base_url, params=query, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.base_url, params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise SEOProviderError(
                f"Timeout ({self.timeout}s) consultando SerpAPI", self.proveedor_id, e
            )
        except httpx.HTTPError as e:
            raise SEOProviderError(f"Error HTTP en SerpAPI: {e}", self.proveedor_id, e)
        except ValueError as e:
            raise SEOProviderError("Respuesta de SerpAPI no es JSON válido", self.proveedor_id, e)

        if not isinstance(data, dict):
            raise SEOProviderError("Respuesta de SerpAPI con formato inesperado", self.proveedor_id)
        if data.get("error"):
            raise SEOProviderError(f"SerpAPI devolvió error: {data['error']}", self.proveedor_id)
        return data

    # =========================================================================
    # Capacidades
    # =========================================================================

    async def get_keyword_data(self, keyword: str) -> KeywordMetric:
        logger.info(f"[SerpAPI] Keyword data: {keyword}")
        try:
            data = await self._search(q=keyword, num=10)
        except SEOProviderError as e:
            logger.warning(f"[SerpAPI] Falló keyword data ({e}), usando valores por defecto")
            return fallback_keyword_metric(keyword)

        search_volume, estimated = self._extract_search_volume(data)
        answer_box = _as_dict(data.get("answer_box"))
        return KeywordMetric(
            keyword=keyword,
            search_volume=search_volume,
            difficulty=self._calculate_difficulty(data),
            cost_per_click=_as_float(answer_box.get("cpc")),
            competition_level=self._determine_competition(data),
            trend=KeywordTrend.STABLE,
            is_estimated=estimated,
        )

    async def analyze_content(self, text: str, keyword: str) -> ProviderContentAnalysis:
        logger.info(f"[SerpAPI] Analizando contenido para: {keyword}")
        data = await self._search(q=keyword, num=5)

        top_results = [_as_dict(r) for r in _as_list(data.get("organic_results"))]
        competitor_urls = [r["link"] for r in top_results[:3] if r.get("link")]

        density = keyword_density(text, keyword)
        readability = readability_score(text)

        snippets = [r.get("snippet") or "" for r in top_results]
        if not all(isinstance(s, str) for s in snippets):
            raise SEOProviderError("SerpAPI devolvió snippets con formato inesperado", self.proveedor_id)

        recommendations = []
        avg_snippet = sum(len(s) for s in snippets) / max(len(snippets), 1)
        if len(text) < avg_snippet * 0.7:
            recommendations.append("Expand content to match competitor length")

        score = round_half_up(density * 0.3 + readability * 0.4 + 50 * 0.3)
        return ProviderContentAnalysis(
            score=min(100, score),
            keyword_density=density,
            readability=readability,
            recommendations=recommendations,
            competitor_urls=competitor_urls,
        )

    async def get_keyword_suggestions(self, seed: str) -> list[str]:
        logger.info(f"[SerpAPI] Sugerencias para: {seed}")
        data = await self._search(q=seed, autocomplete=1)

        raw = _as_list(_as_dict(data.get("answer_box")).get("suggestions"))
        suggestions = []
        for s in raw[:10]:
            value = s if isinstance(s, str) else _as_dict(s).get("title", "")
            if value:
                suggestions.append(value)
        return suggestions or default_keyword_suggestions(seed)

    async def get_competitor_analysis(self, keyword: str) -> list[CompetitorResult]:
        logger.info(f"[SerpAPI] Competidores para: {keyword}")
        data = await self._search(q=keyword, num=10)

        competitors = []
        for rank, result in enumerate(_as_list(data.get("organic_results"))[:5]):
            result = _as_dict(result)
            if not result.get("link"):
                continue
            competitors.append(CompetitorResult(
                url=result["link"],
                rank=rank + 1,
                title=result.get("title") or "",
                snippet=result.get("snippet") or "",
                authority=self._estimate_authority(rank),
            ))
        return competitors

    # =========================================================================
    # Derivación de métricas
    # =========================================================================

    def _extract_search_volume(self, data: dict) -> tuple[int, bool]:
        """Retorna (volumen, es_estimado)."""
        value = _as_dict(data.get("answer_box")).get("search_volume")
        if value is not None:
            digits = re.sub(r"[^0-9]", "", str(value))
            return (int(digits) if digits else 0) or 1000, False
        # Placeholder acotado, NO es una medición
        return self._rng.randint(500, 10_499), True

    @staticmethod
    def _calculate_difficulty(data: dict) -> int:
        total = _as_float(_as_dict(data.get("search_information")).get("total_results"))
        for threshold, difficulty in DIFFICULTY_BUCKETS:
            if total > threshold:
                return difficulty
        return MIN_DIFFICULTY

    @staticmethod
    def _determine_competition(data: dict) -> CompetitionLevel:
        ads = _as_list(data.get("ads"))
        if len(ads) > 5:
            return CompetitionLevel.HIGH
        if len(ads) > 2:
            return CompetitionLevel.MEDIUM
        return CompetitionLevel.LOW

    @staticmethod
    def _estimate_authority(rank_index: int) -> int:
        return max(20, 100 - rank_index * 15)


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _as_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
