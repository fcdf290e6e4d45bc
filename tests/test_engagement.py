"""
ContentEngine - Tests de engagement y reporte de rendimiento.
"""
from datetime import datetime

from core.engagement import (
    EngagementMetrics,
    best_posting_times,
    calculate_engagement_score,
    enrich_post,
    extract_top_keywords,
    monthly_recommendations,
    optimal_frequency,
    top_performing,
    top_platforms,
)
from core.keyword_ranker import HistoricalPost


def post(pid, keywords, score, published_at=datetime(2026, 9, 1, 9), platform="blog"):
    return HistoricalPost(
        id=pid,
        content_keywords=keywords,
        published_at=published_at,
        engagement_score=score,
        platform=platform,
    )


class TestEngagementScore:

    def test_weighted_rates(self):
        metrics = EngagementMetrics(views=100, clicks=10, shares=5, comments=2, conversion_rate=0.1)
        assert calculate_engagement_score(metrics) == 7

    def test_zero_views_only_counts_conversion(self):
        metrics = EngagementMetrics(views=0, clicks=50, shares=50, comments=50, conversion_rate=0.5)
        assert calculate_engagement_score(metrics) == 10

    def test_no_activity(self):
        assert calculate_engagement_score(EngagementMetrics()) == 0

    def test_capped_at_100(self):
        metrics = EngagementMetrics(views=10, clicks=100, shares=100, comments=100, conversion_rate=1.0)
        assert calculate_engagement_score(metrics) == 100

    def test_enrich_post(self):
        original = post(1, "crm", None)
        enriched = enrich_post(original, EngagementMetrics(views=100, clicks=10, shares=5, comments=2, conversion_rate=0.1))
        assert enriched.engagement_score == 7
        assert original.engagement_score is None


class TestPerformanceInsights:

    def test_top_performing_orders_and_limits(self, now):
        posts = [post(i, "kw", i * 10) for i in range(12)]
        top = top_performing(posts, limit=3, now=now)
        assert [p.id for p in top] == [11, 10, 9]

    def test_top_performing_respects_window(self, now):
        posts = [post(1, "old", 99, published_at=datetime(2025, 1, 1)), post(2, "new", 10)]
        assert [p.id for p in top_performing(posts, now=now)] == [2]

    def test_extract_top_keywords(self):
        posts = [post(1, "crm, email", 30), post(2, "email", 20), post(3, "seo", None)]
        assert extract_top_keywords(posts) == ["email", "crm", "seo"]

    def test_best_posting_times(self):
        posts = [
            post(1, "a", 80, published_at=datetime(2026, 9, 1, 9)),
            post(2, "a", 40, published_at=datetime(2026, 9, 2, 9)),
            post(3, "a", 90, published_at=datetime(2026, 9, 3, 18)),
        ]
        assert best_posting_times(posts) == [
            {"time": "18:00", "avg_score": 90},
            {"time": "9:00", "avg_score": 60},
        ]

    def test_top_platforms(self):
        posts = [post(1, "a", 20, platform="blog"), post(2, "a", 60, platform="linkedin"), post(3, "a", 40, platform="linkedin")]
        assert top_platforms(posts) == [
            {"platform": "linkedin", "avg_score": 50, "total_posts": 2},
            {"platform": "blog", "avg_score": 20, "total_posts": 1},
        ]

    def test_optimal_frequency(self):
        assert optimal_frequency([post(1, "a", 80)]) == "3-4 posts per week"
        assert optimal_frequency([post(1, "a", 60)]) == "2-3 posts per week"
        assert optimal_frequency([post(1, "a", 50)]) == "1-2 posts per week"
        assert optimal_frequency([]) == "1-2 posts per week"

    def test_monthly_recommendations(self, now):
        posts = [
            post(1, "crm, email", 90, platform="linkedin"),
            post(2, "seo", 70),
            post(3, "ads", 10),
        ]
        report = monthly_recommendations(posts, now=now)

        assert report["top_keywords"] == ["crm", "email", "seo", "ads"]
        assert report["suggested_topics"] == ["crm", "email", "seo", "ads"]
        assert report["top_content_ids"] == [1, 2, 3]
        assert report["recommended_frequency"] == "2-3 posts per week"
        assert report["top_platforms"][0]["platform"] == "linkedin"

    def test_monthly_recommendations_without_history(self, now):
        report = monthly_recommendations([], now=now)
        assert report["top_keywords"] == []
        assert report["top_content_ids"] == []
        assert report["recommended_frequency"] == "1-2 posts per week"
