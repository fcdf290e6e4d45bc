"""
Celery task: SEO analysis of a calendar entry's draft.

scheduled → draft        (the draft text arrives)
draft → seo_optimized    (only if overall_score >= SEO_MIN_SCORE)
"""
import logging
from typing import Optional

from sqlalchemy import select

from config import get_settings
from core.celery_app import celery_app, run_async
from core.content_calendar import ContentStatus
from core.seo_optimizer import SEOOptimizer
from core.seo_providers import create_seo_provider

logger = logging.getLogger("contentengine.tasks.seo_analysis")


async def _analyze_entry(
    entry_id: int,
    text: str,
    session_factory=None,
    optimizer: Optional[SEOOptimizer] = None,
) -> Optional[dict]:
    from models.base import async_session
    from models.calendar import CalendarEntry

    settings = get_settings()
    session_factory = session_factory or async_session
    optimizer = optimizer or SEOOptimizer(
        create_seo_provider(settings), logger=logger, timeout=settings.seo_request_timeout
    )

    async with session_factory() as session:
        result = await session.execute(select(CalendarEntry).where(CalendarEntry.id == entry_id))
        entry = result.scalar_one_or_none()
        if not entry:
            logger.warning("[Celery] CalendarEntry %d no encontrada", entry_id)
            return None

        status = ContentStatus(entry.status)
        if status == ContentStatus.SCHEDULED:
            status = status.advance(ContentStatus.DRAFT)
        elif status != ContentStatus.DRAFT:
            logger.warning(
                "[Celery] CalendarEntry %d en estado '%s', no se re-analiza", entry_id, entry.status
            )
            return None

        keyword = (entry.keywords or [""])[0]
        analysis = await optimizer.analyze(text, keyword, entry.titulo)

        entry.borrador = text
        entry.seo_score = analysis.overall_score
        entry.seo_analysis = analysis.to_dict()
        if analysis.overall_score >= settings.seo_min_score:
            status = status.advance(ContentStatus.SEO_OPTIMIZED)
        entry.status = status.value
        await session.commit()

    logger.info(
        "[Celery] CalendarEntry %d analizada: score %d → %s",
        entry_id, analysis.overall_score, status.value,
    )
    return {"entry_id": entry_id, "seo_score": analysis.overall_score, "status": status.value}


@celery_app.task(name="core.tasks.seo_analysis.analyze_calendar_entry")
def analyze_calendar_entry(entry_id: int, text: str):
    """Analyzes the draft of a calendar entry and stores its SEO score."""
    return run_async(_analyze_entry(entry_id, text))
