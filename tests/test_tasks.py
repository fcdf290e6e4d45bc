"""
ContentEngine - Tests de las tareas Celery (lógica async sobre SQLite temporal).
"""
from datetime import date, datetime

import pytest
from sqlalchemy import func, select

from core.content_calendar import ContentStatus, Platform
from core.engagement import EngagementMetrics
from core.seo_optimizer import SEOOptimizer
from core.seo_providers import MockSEOProvider
from core.tasks import analytics
from core.tasks.analytics import _is_last_day_of_month, _monthly_report, _track_engagement, _weekly_analysis
from core.tasks.calendar_gen import _calendar_options, _generate_calendar
from core.tasks.seo_analysis import _analyze_entry
from models.blog_post import BlogPost
from models.calendar import CalendarEntry
from models.performance_report import PerformanceReport

GOOD_TEXT = (
    "## Intro\n" + "It is a good day. " * 30 + "We use crm to grow.\n"
    "## More\n" + "It is a good day. " * 30 + "We use crm to grow."
)


async def add_posts(session_factory, *posts):
    async with session_factory() as session:
        session.add_all(posts)
        await session.commit()


async def count_entries(session_factory, **filters):
    async with session_factory() as session:
        query = select(func.count(CalendarEntry.id)).where(
            *[getattr(CalendarEntry, column) == value for column, value in filters.items()]
        )
        return (await session.execute(query)).scalar_one()


async def add_entry(session_factory, status="scheduled", keywords=("crm",)):
    async with session_factory() as session:
        entry = CalendarEntry(
            item_id=f"item-{status}",
            titulo="How-to Guide: crm",
            keywords=list(keywords),
            fecha_programada=date(2026, 11, 3),
            mes=11,
            anio=2026,
            platform="blog",
            status=status,
        )
        session.add(entry)
        await session.commit()
        return entry.id


# ============================================================
# CALENDARIO
# ============================================================

class TestCalendarGeneration:

    async def test_without_history_uses_default_keywords(self, session_factory, now):
        items = await _generate_calendar(9, 2026, session_factory=session_factory, now=now)

        assert len(items) == 10
        assert await count_entries(session_factory, mes=9, anio=2026, status="scheduled") == 10

        async with session_factory() as session:
            first = (await session.execute(
                select(CalendarEntry).order_by(CalendarEntry.fecha_programada, CalendarEntry.id)
            )).scalars().first()
        assert first.titulo == "How-to Guide: sales automation"
        assert first.fecha_programada == date(2026, 9, 1)
        assert first.keywords == ["sales automation"]

    async def test_history_drives_keywords(self, session_factory, now):
        await add_posts(
            session_factory,
            BlogPost(titulo="CRM 101", content_keywords="crm, email", published_on=datetime(2026, 9, 1), engagement_score=40),
            BlogPost(titulo="CRM tips", content_keywords="crm", published_on=datetime(2026, 10, 1), engagement_score=20),
            BlogPost(titulo="Old", content_keywords="fax", published_on=datetime(2025, 1, 1), engagement_score=99),
        )

        items = await _generate_calendar(11, 2026, session_factory=session_factory, now=now)

        assert len(items) == 4
        assert [i.keywords[0] for i in items] == ["crm", "crm", "email", "email"]
        assert [i.platform for i in items] == [Platform.BLOG, Platform.LINKEDIN] * 2

    async def test_replace_keeps_touched_entries(self, session_factory, now):
        await _generate_calendar(9, 2026, session_factory=session_factory, now=now)

        async with session_factory() as session:
            entry = (await session.execute(select(CalendarEntry).limit(1))).scalar_one()
            entry.status = ContentStatus.DRAFT.value
            await session.commit()

        await _generate_calendar(9, 2026, session_factory=session_factory, now=now, replace_scheduled=True)

        assert await count_entries(session_factory, mes=9, anio=2026, status="scheduled") == 10
        assert await count_entries(session_factory, mes=9, anio=2026) == 11

    def test_calendar_options_from_yaml(self):
        options = _calendar_options()
        assert options["platforms"] == [Platform.BLOG, Platform.LINKEDIN]
        assert options["content_types"][0] == "How-to Guide"


# ============================================================
# SEO DE BORRADORES
# ============================================================

class TestSEOAnalysisTask:

    async def test_good_draft_becomes_seo_optimized(self, session_factory):
        entry_id = await add_entry(session_factory)

        result = await _analyze_entry(
            entry_id, GOOD_TEXT, session_factory=session_factory, optimizer=SEOOptimizer(MockSEOProvider())
        )

        assert result == {"entry_id": entry_id, "seo_score": 100, "status": "seo_optimized"}
        async with session_factory() as session:
            entry = await session.get(CalendarEntry, entry_id)
        assert entry.status == "seo_optimized"
        assert entry.borrador == GOOD_TEXT
        assert entry.seo_analysis["keyword"] == "crm"

    async def test_weak_draft_stays_in_draft(self, session_factory):
        entry_id = await add_entry(session_factory)

        result = await _analyze_entry(
            entry_id, "Too short.", session_factory=session_factory, optimizer=SEOOptimizer(MockSEOProvider())
        )

        assert result["status"] == "draft"
        assert result["seo_score"] < 60

    async def test_draft_can_be_reanalyzed(self, session_factory):
        entry_id = await add_entry(session_factory, status="draft")
        result = await _analyze_entry(
            entry_id, GOOD_TEXT, session_factory=session_factory, optimizer=SEOOptimizer(MockSEOProvider())
        )
        assert result["status"] == "seo_optimized"

    async def test_optimized_entry_is_not_touched(self, session_factory):
        entry_id = await add_entry(session_factory, status="seo_optimized")
        result = await _analyze_entry(
            entry_id, "Too short.", session_factory=session_factory, optimizer=SEOOptimizer(MockSEOProvider())
        )
        assert result is None

    async def test_missing_entry(self, session_factory):
        assert await _analyze_entry(999, GOOD_TEXT, session_factory=session_factory,
                                    optimizer=SEOOptimizer(MockSEOProvider())) is None


# ============================================================
# RENDIMIENTO
# ============================================================

class TestAnalyticsTasks:

    async def test_track_engagement(self, session_factory):
        post = BlogPost(titulo="CRM 101", content_keywords="crm", published_on=datetime(2026, 9, 1))
        await add_posts(session_factory, post)

        metrics = EngagementMetrics(views=100, clicks=10, shares=5, comments=2, conversion_rate=0.1)
        assert await _track_engagement(post.id, metrics, session_factory=session_factory) == 7

        async with session_factory() as session:
            stored = await session.get(BlogPost, post.id)
        assert stored.engagement_score == 7
        assert stored.views == 100
        assert stored.last_tracked is not None

    async def test_track_missing_post(self, session_factory):
        assert await _track_engagement(42, EngagementMetrics(), session_factory=session_factory) is None

    async def test_weekly_analysis(self, session_factory, now):
        await add_posts(
            session_factory,
            BlogPost(titulo="A", content_keywords="a", published_on=datetime(2026, 9, 1), engagement_score=30),
            BlogPost(titulo="B", content_keywords="b", published_on=datetime(2026, 9, 2), engagement_score=80),
        )
        top = await _weekly_analysis(session_factory=session_factory, now=now)
        assert [p.engagement_score for p in top] == [80, 30]

    async def test_monthly_report_is_persisted(self, session_factory, now):
        await add_posts(
            session_factory,
            BlogPost(titulo="A", content_keywords="crm, email", platform="linkedin",
                     published_on=datetime(2026, 9, 1, 9), engagement_score=90),
            BlogPost(titulo="B", content_keywords="seo", published_on=datetime(2026, 9, 2, 9), engagement_score=60),
        )

        report = await _monthly_report(session_factory=session_factory, now=now)

        assert report["top_keywords"] == ["crm", "email", "seo"]
        assert report["recommended_frequency"] == "3-4 posts per week"
        async with session_factory() as session:
            stored = (await session.execute(select(PerformanceReport))).scalars().all()
        assert len(stored) == 1
        assert stored[0].recommendations["top_keywords"] == ["crm", "email", "seo"]
        assert len(stored[0].top_content_ids) == 2

    @pytest.mark.parametrize("today, expected", [
        (date(2026, 9, 30), True),
        (date(2026, 10, 30), False),
        (date(2028, 2, 28), False),
        (date(2028, 2, 29), True),
        (date(2026, 12, 31), True),
    ])
    def test_is_last_day_of_month(self, today, expected):
        assert _is_last_day_of_month(today) is expected

    def test_monthly_task_skips_other_days(self, monkeypatch):
        monkeypatch.setattr(analytics, "_is_last_day_of_month", lambda today: False)
        assert analytics.monthly_recommendations_report() is None
