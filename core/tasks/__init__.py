"""ContentEngine - Tareas Celery."""
from core.tasks.calendar_gen import generate_monthly_calendar, generate_calendar_for
from core.tasks.seo_analysis import analyze_calendar_entry
from core.tasks.analytics import (
    track_post_engagement,
    weekly_performance_analysis,
    monthly_recommendations_report,
)
