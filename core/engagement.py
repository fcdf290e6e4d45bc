"""
ContentEngine - Engagement y análisis de rendimiento.

calculate_engagement_score reduce los contadores crudos de un post a un
único score 0-100. Ese score es la única señal numérica que consume el
ranking de keywords del siguiente ciclo.

El resto del módulo son las métricas del reporte mensual: contenido top,
keywords top, mejores horarios, mejores plataformas y frecuencia sugerida.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from core.keyword_ranker import HistoricalPost, posts_in_window, DEFAULT_WINDOW_MONTHS
from core.scoring import round_half_up

# Pesos del score (suman 1.0)
CLICK_WEIGHT = 0.3
SHARE_WEIGHT = 0.3
COMMENT_WEIGHT = 0.2
CONVERSION_WEIGHT = 0.2


@dataclass
class EngagementMetrics:
    """Contadores crudos de un post."""
    views: int = 0
    clicks: int = 0
    shares: int = 0
    comments: int = 0
    conversion_rate: float = 0.0    # 0-1


def calculate_engagement_score(metrics: EngagementMetrics) -> int:
    """
    Score 0-100.

    raw = click% * 0.3 + share% * 0.3 + comment% * 0.2 + conversion * 100 * 0.2
    Las tasas valen 0 si no hay vistas.
    """
    views = metrics.views or 0
    if views > 0:
        click_rate = (metrics.clicks or 0) / views * 100
        share_rate = (metrics.shares or 0) / views * 100
        comment_rate = (metrics.comments or 0) / views * 100
    else:
        click_rate = share_rate = comment_rate = 0.0

    raw = (
        click_rate * CLICK_WEIGHT
        + share_rate * SHARE_WEIGHT
        + comment_rate * COMMENT_WEIGHT
        + (metrics.conversion_rate or 0) * 100 * CONVERSION_WEIGHT
    )
    return min(100, round_half_up(raw))


def enrich_post(post: HistoricalPost, metrics: EngagementMetrics) -> HistoricalPost:
    """Copia del post con su engagement_score calculado."""
    return post.with_engagement(calculate_engagement_score(metrics))


# =============================================================================
# Reporte de rendimiento
# =============================================================================

def _score(post: HistoricalPost) -> float:
    return post.engagement_score or 0


def top_performing(
    posts: Iterable[HistoricalPost],
    limit: int = 10,
    window_months: int = DEFAULT_WINDOW_MONTHS,
    now: Optional[datetime] = None,
) -> list[HistoricalPost]:
    """Posts de la ventana ordenados por engagement, mejor primero."""
    recent = posts_in_window(posts, window_months, now)
    return sorted(recent, key=_score, reverse=True)[:limit]


def extract_top_keywords(posts: Iterable[HistoricalPost], limit: int = 10) -> list[str]:
    """Keywords ponderadas por engagement (sin score cuenta 0)."""
    weights: dict[str, float] = {}
    for post in posts:
        for keyword in post.keywords:
            weights[keyword] = weights.get(keyword, 0) + _score(post)
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [keyword for keyword, _ in ranked[:limit]]


def best_posting_times(posts: Iterable[HistoricalPost], limit: int = 3) -> list[dict]:
    """Promedio de engagement por hora de publicación: [{"time": "9:00", "avg_score": ...}]."""
    slots: dict[str, list[float]] = {}
    for post in posts:
        if post.published_at is None:
            continue
        slots.setdefault(f"{post.published_at.hour}:00", []).append(_score(post))

    averages = [
        {"time": slot, "avg_score": sum(scores) / len(scores)}
        for slot, scores in slots.items()
    ]
    averages.sort(key=lambda s: s["avg_score"], reverse=True)
    return averages[:limit]


def top_platforms(posts: Iterable[HistoricalPost]) -> list[dict]:
    """Promedio de engagement y número de posts por plataforma."""
    platforms: dict[str, list[float]] = {}
    for post in posts:
        if post.platform:
            platforms.setdefault(post.platform, []).append(_score(post))

    result = [
        {"platform": platform, "avg_score": sum(scores) / len(scores), "total_posts": len(scores)}
        for platform, scores in platforms.items()
    ]
    result.sort(key=lambda p: p["avg_score"], reverse=True)
    return result


def optimal_frequency(posts: Iterable[HistoricalPost]) -> str:
    scores = [_score(p) for p in posts]
    average = sum(scores) / len(scores) if scores else 0
    if average > 70:
        return "3-4 posts per week"
    if average > 50:
        return "2-3 posts per week"
    return "1-2 posts per week"


def monthly_recommendations(
    posts: Iterable[HistoricalPost],
    window_months: int = DEFAULT_WINDOW_MONTHS,
    now: Optional[datetime] = None,
) -> dict:
    """Insumos para ajustar el calendario del próximo mes."""
    top_content = top_performing(posts, window_months=window_months, now=now)
    top_keywords = extract_top_keywords(top_content)
    return {
        "top_keywords": top_keywords,
        "best_posting_times": best_posting_times(top_content),
        "top_platforms": top_platforms(top_content),
        "suggested_topics": top_keywords[:5],
        "recommended_frequency": optimal_frequency(top_content),
        "top_content_ids": [p.id for p in top_content[:5]],
    }
