"""
ContentEngine - Ranking de keywords por engagement histórico.

Cada keyword acumula el engagement_score de todos los posts de la ventana
(6 meses por defecto) que la mencionan. El orden es el contrato: mayor peso
primero y, en empate, la keyword que apareció antes.
"""
import calendar
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Optional, Union

DEFAULT_WINDOW_MONTHS = 6
DEFAULT_LIMIT = 20
KEYWORD_DELIMITER = ","

# Arranque en frío: sin historial el calendario no debe quedar vacío
DEFAULT_KEYWORDS = [
    "sales automation",
    "lead generation",
    "AI content marketing",
    "SEO optimization",
    "social media automation",
]


@dataclass
class HistoricalPost:
    """Post publicado, de solo lectura para el motor."""
    id: Union[int, str]
    content_keywords: Union[str, Iterable[str], None]
    published_at: datetime
    engagement_score: Optional[float] = None   # 0-100
    platform: Optional[str] = None

    @property
    def keywords(self) -> list[str]:
        """
        Keywords limpias: separadas por coma, sin espacios ni vacías.
        None y los valores no textuales no aportan keywords.
        """
        raw = self.content_keywords
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = raw.split(KEYWORD_DELIMITER)
        return [k.strip() for k in raw if isinstance(k, str) and k.strip()]

    def with_engagement(self, engagement_score: float) -> "HistoricalPost":
        return replace(self, engagement_score=engagement_score)


@dataclass
class RankedKeyword:
    keyword: str
    aggregate_weight: float = 0.0


def months_ago(now: datetime, months: int) -> datetime:
    """Resta meses de calendario; el día se ajusta al último del mes destino."""
    month_index = now.month - 1 - months
    year = now.year + month_index // 12
    month = month_index % 12 + 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def posts_in_window(
    posts: Iterable[HistoricalPost],
    window_months: int = DEFAULT_WINDOW_MONTHS,
    now: Optional[datetime] = None,
) -> list[HistoricalPost]:
    cutoff = months_ago(now or datetime.utcnow(), window_months)
    return [p for p in posts if p.published_at is not None and p.published_at >= cutoff]


def rank_keywords(
    posts: Iterable[HistoricalPost],
    window_months: int = DEFAULT_WINDOW_MONTHS,
    now: Optional[datetime] = None,
    limit: Optional[int] = DEFAULT_LIMIT,
) -> list[RankedKeyword]:
    """
    Ordena keywords por engagement acumulado.

    Args:
        posts: Historial de posts (el llamador lo consulta y lo pasa completo).
        window_months: Ventana móvil en meses.
        now: Referencia temporal (por defecto utcnow).
        limit: Máximo de keywords; None = sin límite.

    Returns:
        Lista ordenada. Si ningún post califica, DEFAULT_KEYWORDS con peso 0.
    """
    # dict conserva el orden de inserción → desempate por primera aparición
    weights: dict[str, float] = {}
    for post in posts_in_window(posts, window_months, now):
        engagement = 1 if post.engagement_score is None else post.engagement_score
        for keyword in post.keywords:
            weights[keyword] = weights.get(keyword, 0) + engagement

    if not weights:
        return [RankedKeyword(keyword=k) for k in DEFAULT_KEYWORDS]

    # sorted() es estable: los empates conservan el orden de aparición
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [RankedKeyword(keyword=k, aggregate_weight=w) for k, w in ranked]
