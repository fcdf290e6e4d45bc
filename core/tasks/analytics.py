"""
ContentEngine - Tareas de rendimiento.

- track_post_engagement: guarda contadores y engagement_score de un post.
- weekly_performance_analysis: domingos 11PM, registra el contenido top.
- monthly_recommendations_report: último día del mes, persiste el reporte.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy import select

from config import get_settings
from core.celery_app import celery_app, run_async
from core.engagement import (
    EngagementMetrics,
    calculate_engagement_score,
    monthly_recommendations,
    top_performing,
)
from core.keyword_ranker import months_ago

logger = logging.getLogger("contentengine.tasks.analytics")


async def _track_engagement(post_id: int, metrics: EngagementMetrics, session_factory=None) -> Optional[int]:
    """Actualiza las métricas del post. Retorna el engagement_score o None si no existe."""
    from models.base import async_session
    from models.blog_post import BlogPost

    session_factory = session_factory or async_session
    score = calculate_engagement_score(metrics)

    async with session_factory() as session:
        post = await session.get(BlogPost, post_id)
        if not post:
            logger.warning("[Analytics] BlogPost %d no encontrado", post_id)
            return None

        post.views = metrics.views
        post.clicks = metrics.clicks
        post.shares = metrics.shares
        post.comments = metrics.comments
        post.conversion_rate = metrics.conversion_rate
        post.engagement_score = score
        post.last_tracked = datetime.utcnow()
        await session.commit()

    logger.info("[Analytics] Post %d → engagement %d", post_id, score)
    return score


async def _load_recent_posts(session, now: datetime) -> list:
    from models.blog_post import BlogPost

    cutoff = months_ago(now, get_settings().history_window_months)
    result = await session.execute(select(BlogPost).where(BlogPost.published_on >= cutoff))
    return [post.to_historical() for post in result.scalars().all()]


async def _weekly_analysis(session_factory=None, now: Optional[datetime] = None) -> list:
    from models.base import async_session

    session_factory = session_factory or async_session
    now = now or datetime.utcnow()

    async with session_factory() as session:
        posts = await _load_recent_posts(session, now)

    top = top_performing(posts, window_months=get_settings().history_window_months, now=now)
    logger.info("[Analytics] %d posts top en la ventana actual", len(top))
    for post in top:
        logger.debug("[Analytics]   post %s → %s", post.id, post.engagement_score)
    return top


async def _monthly_report(session_factory=None, now: Optional[datetime] = None) -> dict:
    from models.base import async_session
    from models.performance_report import PerformanceReport

    session_factory = session_factory or async_session
    now = now or datetime.utcnow()

    async with session_factory() as session:
        posts = await _load_recent_posts(session, now)
        recommendations = monthly_recommendations(
            posts, window_months=get_settings().history_window_months, now=now
        )
        session.add(PerformanceReport(
            report_date=now,
            recommendations=recommendations,
            top_content_ids=recommendations["top_content_ids"],
        ))
        await session.commit()

    logger.info(
        "[Analytics] Reporte mensual: %d keywords top, frecuencia %s",
        len(recommendations["top_keywords"]), recommendations["recommended_frequency"],
    )
    return recommendations


def _is_last_day_of_month(today: date) -> bool:
    return (today + timedelta(days=1)).day == 1


@celery_app.task(name="core.tasks.analytics.track_post_engagement")
def track_post_engagement(
    post_id: int,
    views: int = 0,
    clicks: int = 0,
    shares: int = 0,
    comments: int = 0,
    conversion_rate: float = 0.0,
):
    metrics = EngagementMetrics(
        views=views, clicks=clicks, shares=shares, comments=comments, conversion_rate=conversion_rate
    )
    return run_async(_track_engagement(post_id, metrics))


@celery_app.task(name="core.tasks.analytics.weekly_performance_analysis")
def weekly_performance_analysis():
    """Sunday 11PM: logs the top-performing posts of the rolling window."""
    logger.info("[Celery] weekly_performance_analysis: iniciando...")
    try:
        top = run_async(_weekly_analysis())
    except Exception as exc:
        logger.error("[Celery] Falló el análisis semanal: %s", exc)
        return 0
    return len(top)


@celery_app.task(name="core.tasks.analytics.monthly_recommendations_report")
def monthly_recommendations_report():
    """Days 28-31 at 10PM; only acts on the last day of the month."""
    if not _is_last_day_of_month(date.today()):
        return None

    logger.info("[Celery] Generando recomendaciones mensuales")
    try:
        return run_async(_monthly_report())
    except Exception as exc:
        logger.error("[Celery] Falló el reporte mensual: %s", exc)
        return None
