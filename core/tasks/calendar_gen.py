"""
Celery tasks for editorial calendar generation.
Beat schedule: day 1 of each month at 9AM
"""
import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy import select, delete as sa_delete, and_

from config import get_config, get_settings
from core.celery_app import celery_app, run_async
from core.content_calendar import (
    CONTENT_TYPES,
    DEFAULT_PLATFORMS,
    ContentItem,
    ContentStatus,
    Platform,
    build_schedule,
)
from core.keyword_ranker import months_ago, rank_keywords

logger = logging.getLogger("contentengine.tasks.calendar_gen")


def _calendar_options() -> dict:
    """Content types and platforms from config.yaml, falling back to defaults."""
    cal_config = get_config().get("calendar") or {}
    return {
        "content_types": cal_config.get("content_types") or CONTENT_TYPES,
        "platforms": [Platform(p) for p in cal_config.get("platforms") or DEFAULT_PLATFORMS],
    }


async def _load_history(session, window_months: int, now: datetime) -> list:
    """Blog posts published inside the rolling window, as HistoricalPost."""
    from models.blog_post import BlogPost

    cutoff = months_ago(now, window_months)
    result = await session.execute(
        select(BlogPost).where(BlogPost.published_on >= cutoff).order_by(BlogPost.published_on)
    )
    return [post.to_historical() for post in result.scalars().all()]


async def _generate_calendar(
    mes: int,
    año: int,
    session_factory=None,
    now: Optional[datetime] = None,
    replace_scheduled: bool = False,
) -> list[ContentItem]:
    """Core async logic shared by both tasks: rank → build → persist."""
    from models.base import async_session
    from models.calendar import CalendarEntry

    settings = get_settings()
    session_factory = session_factory or async_session
    now = now or datetime.utcnow()

    async with session_factory() as session:
        # Optionally delete entries of that month that nobody has touched yet
        if replace_scheduled:
            await session.execute(
                sa_delete(CalendarEntry).where(
                    and_(
                        CalendarEntry.mes == mes,
                        CalendarEntry.anio == año,
                        CalendarEntry.status == ContentStatus.SCHEDULED.value,
                    )
                )
            )
            logger.info("[Celery] Entradas 'scheduled' eliminadas para %d/%d", mes, año)

        history = await _load_history(session, settings.history_window_months, now)
        ranked = rank_keywords(
            history,
            window_months=settings.history_window_months,
            now=now,
            limit=settings.max_ranked_keywords,
        )
        if not history:
            logger.info("[Celery] Sin historial en la ventana, usando keywords por defecto")

        items = build_schedule(ranked, mes, año, **_calendar_options())

        for item in items:
            session.add(CalendarEntry(
                item_id=item.id,
                titulo=item.title,
                descripcion=item.description,
                keywords=item.keywords,
                fecha_programada=item.publish_date,
                mes=mes,
                anio=año,
                platform=item.platform.value,
                status=item.status.value,
            ))
        await session.commit()

    logger.info(
        "[Celery] Calendario %d/%d generado: %d entradas a partir de %d keywords",
        mes, año, len(items), len(ranked),
    )
    return items


@celery_app.task(name="core.tasks.calendar_gen.generate_monthly_calendar")
def generate_monthly_calendar():
    """
    Runs on day 1 of each month (9AM).
    Generates the editorial calendar for the current month.
    """
    today = date.today()
    logger.info("[Celery] Iniciando generación de calendario para %d/%d", today.month, today.year)

    try:
        items = run_async(_generate_calendar(today.month, today.year))
    except Exception as exc:
        logger.error("[Celery] Error generando calendario %d/%d: %s", today.month, today.year, exc)
        return 0
    return len(items)


@celery_app.task(name="core.tasks.calendar_gen.generate_calendar_for")
def generate_calendar_for(mes: int, año: int):
    """
    Generates the editorial calendar for a specific month/year.
    Deletes existing 'scheduled' entries for that month before generating.
    """
    logger.info("[Celery] Generando calendario %d/%d", mes, año)
    items = run_async(_generate_calendar(mes, año, replace_scheduled=True))
    return {"mes": mes, "año": año, "entradas_creadas": len(items)}
