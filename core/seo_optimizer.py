"""
ContentEngine - Optimizador SEO.

Punto de mezcla entre el análisis local y la señal externa (SerpAPI):

  1. Densidad, legibilidad y headings se calculan SIEMPRE localmente.
  2. Se intenta provider.analyze_content con timeout acotado.
     - Éxito: recomendaciones externas primero, locales después,
       y se exponen las URLs de competidores.
     - Fallo: se registra la degradación y se sigue solo con lo local.
  3. La puntuación compuesta usa la lista final (mezclada o local).

Un fallo del proveedor NUNCA hace fallar analyze().
"""
import asyncio
import logging
from dataclasses import dataclass, field, asdict
from typing import Optional

import httpx

from core.analyzer import (
    keyword_density,
    readability_score,
    has_heading_structure,
    count_words,
)
from core.exceptions import SEOProviderError
from core.recommendations import generate_recommendations
from core.scoring import calculate_seo_score
from core.seo_providers.base import (
    SEOProvider,
    KeywordMetric,
    CompetitorResult,
    fallback_keyword_metric,
    default_keyword_suggestions,
)

MAX_RECOMMENDATIONS = 5

# Fallos del proveedor que se absorben; cualquier otro error se propaga
RECOVERABLE_ERRORS = (SEOProviderError, httpx.HTTPError, asyncio.TimeoutError)


@dataclass(frozen=True)
class ContentDraft:
    """Borrador a puntuar. No se persiste desde el motor."""
    text: str
    target_keyword: str
    title: str = ""


@dataclass
class ExternalSignal:
    """Datos aportados por el proveedor externo."""
    competitor_urls: list[str] = field(default_factory=list)
    external_score: int = 0
    provider: str = ""


@dataclass
class ContentAnalysis:
    """Resultado de un análisis SEO."""
    keyword: str
    overall_score: int
    keyword_density_pct: float
    readability_score: float
    has_proper_heading_structure: bool
    recommendations: list[str] = field(default_factory=list)
    external_signal: Optional[ExternalSignal] = None

    def to_dict(self) -> dict:
        return asdict(self)


class SEOOptimizer:
    """
    Orquesta el análisis SEO de un borrador.

    Uso:
        optimizer = SEOOptimizer(create_seo_provider())
        analysis = await optimizer.analyze(texto, "sales automation", "Título")
    """

    def __init__(
        self,
        provider: SEOProvider,
        logger: Optional[logging.Logger] = None,
        timeout: float = 10.0,
        max_recommendations: int = MAX_RECOMMENDATIONS,
    ):
        """
        Args:
            provider: Proveedor SEO (SerpAPI o mock).
            logger: Logger donde se registran las degradaciones.
            timeout: Segundos máximos para la llamada externa.
            max_recommendations: Tope de recomendaciones devueltas.
        """
        self.provider = provider
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout
        self.max_recommendations = max_recommendations

    async def analyze(self, text: str, keyword: str, title: str = "") -> ContentAnalysis:
        """Analiza un borrador. Solo falla por errores de programación."""
        self.logger.info(f"[SEO] Analizando '{title or keyword}' (keyword: {keyword})")

        # 1. Análisis local
        density = keyword_density(text, keyword)
        readability = readability_score(text)
        headings = has_heading_structure(text)
        local_recommendations = generate_recommendations(
            density, readability, headings, count_words(text)
        )

        # 2. Señal externa
        recommendations = local_recommendations
        external_signal = None
        try:
            external = await asyncio.wait_for(
                self.provider.analyze_content(text, keyword), timeout=self.timeout
            )
        except RECOVERABLE_ERRORS as e:
            self.logger.warning(
                f"[SEO] Proveedor {self.provider.proveedor_id} no disponible "
                f"({type(e).__name__}: {e}). Continuando solo con análisis local."
            )
        else:
            recommendations = _merge(external.recommendations, local_recommendations)
            external_signal = ExternalSignal(
                competitor_urls=list(external.competitor_urls),
                external_score=external.score,
                provider=self.provider.proveedor_id,
            )

        # 3. Puntuación compuesta
        score = calculate_seo_score(density, readability, headings, len(recommendations))

        self.logger.info(f"[SEO] Análisis completo. Score: {score}/100")
        return ContentAnalysis(
            keyword=keyword,
            overall_score=score,
            keyword_density_pct=density,
            readability_score=readability,
            has_proper_heading_structure=headings,
            recommendations=recommendations[: self.max_recommendations],
            external_signal=external_signal,
        )

    async def analyze_draft(self, draft: ContentDraft) -> ContentAnalysis:
        return await self.analyze(draft.text, draft.target_keyword, draft.title)

    async def keyword_data(self, keyword: str) -> KeywordMetric:
        """Métricas de la keyword; el proveedor ya devuelve fallback si falla."""
        try:
            return await asyncio.wait_for(
                self.provider.get_keyword_data(keyword), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            self.logger.warning(f"[SEO] Timeout en keyword data para '{keyword}', usando valores por defecto")
            return fallback_keyword_metric(keyword)

    async def keyword_suggestions(self, seed: str) -> list[str]:
        try:
            return await asyncio.wait_for(
                self.provider.get_keyword_suggestions(seed), timeout=self.timeout
            )
        except RECOVERABLE_ERRORS as e:
            self.logger.warning(f"[SEO] Sugerencias no disponibles para '{seed}': {e}")
            return default_keyword_suggestions(seed)

    async def competitor_analysis(self, keyword: str) -> list[CompetitorResult]:
        try:
            return await asyncio.wait_for(
                self.provider.get_competitor_analysis(keyword), timeout=self.timeout
            )
        except RECOVERABLE_ERRORS as e:
            self.logger.warning(f"[SEO] Análisis de competidores no disponible para '{keyword}': {e}")
            return []


def _merge(external: list[str], local: list[str]) -> list[str]:
    """
    Externas primero, locales después, sin duplicados exactos.

    Quitar duplicados reduce el conteo que penaliza la puntuación: un mensaje
    repetido por el proveedor y por las reglas locales cuenta una sola vez.
    Con SerpAPI no ocurre, su única recomendación no coincide con ninguna local.
    """
    merged = []
    for recommendation in [*external, *local]:
        if recommendation not in merged:
            merged.append(recommendation)
    return merged
