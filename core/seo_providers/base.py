"""
ContentEngine - Clase base para proveedores SEO externos.
Todos los proveedores (SerpAPI, mock) deben implementar esta interfaz.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class CompetitionLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class KeywordTrend(str, Enum):
    RISING = "rising"
    STABLE = "stable"
    FALLING = "falling"


@dataclass
class KeywordMetric:
    """Métricas de una keyword según el proveedor externo."""
    keyword: str
    search_volume: int = 0
    difficulty: int = 0              # 0-100
    cost_per_click: float = 0.0
    competition_level: CompetitionLevel = CompetitionLevel.MEDIUM
    trend: KeywordTrend = KeywordTrend.STABLE
    # True cuando search_volume es un placeholder y NO una medición real
    is_estimated: bool = False


@dataclass
class ProviderContentAnalysis:
    """Análisis de contenido devuelto por el proveedor externo."""
    score: int
    keyword_density: float
    readability: float
    recommendations: list[str] = field(default_factory=list)
    competitor_urls: list[str] = field(default_factory=list)


@dataclass
class CompetitorResult:
    """Competidor orgánico en la SERP."""
    url: str
    rank: int
    title: str = ""
    snippet: str = ""
    authority: int = 0


# Valores conservadores cuando get_keyword_data no puede consultar al proveedor
FALLBACK_SEARCH_VOLUME = 1000
FALLBACK_DIFFICULTY = 50
FALLBACK_CPC = 1.5


def fallback_keyword_metric(keyword: str) -> KeywordMetric:
    """Métrica por defecto documentada. No es una medición real."""
    return KeywordMetric(
        keyword=keyword,
        search_volume=FALLBACK_SEARCH_VOLUME,
        difficulty=FALLBACK_DIFFICULTY,
        cost_per_click=FALLBACK_CPC,
        competition_level=CompetitionLevel.MEDIUM,
        trend=KeywordTrend.STABLE,
        is_estimated=True,
    )


def default_keyword_suggestions(seed: str) -> list[str]:
    """Variantes genéricas de una keyword semilla."""
    return [
        f"{seed} guide",
        f"{seed} tips",
        f"{seed} best practices",
        f"how to {seed}",
        f"{seed} tutorial",
    ]


class SEOProvider(ABC):
    """
    Clase base abstracta para proveedores SEO.

    Contrato de errores:
      - get_keyword_data NUNCA lanza: devuelve fallback_keyword_metric().
      - analyze_content, get_keyword_suggestions y get_competitor_analysis
        lanzan SEOProviderError; el SEOOptimizer decide cómo degradar.
    """

    nombre: str = ""
    proveedor_id: str = ""
    is_mock: bool = False

    @abstractmethod
    async def get_keyword_data(self, keyword: str) -> KeywordMetric:
        """Volumen, dificultad, CPC, competencia y tendencia de la keyword."""

    @abstractmethod
    async def analyze_content(self, text: str, keyword: str) -> ProviderContentAnalysis:
        """
        Analiza el contenido contra la SERP de la keyword.

        Raises:
            SEOProviderError: si el proveedor no responde o responde mal.
        """

    @abstractmethod
    async def get_keyword_suggestions(self, seed: str) -> list[str]:
        """Keywords relacionadas con la semilla."""

    @abstractmethod
    async def get_competitor_analysis(self, keyword: str) -> list[CompetitorResult]:
        """Competidores orgánicos ordenados por posición."""
