"""
ContentEngine - Modelos de base de datos.
"""
from models.base import Base, TimestampMixin, init_db, engine, async_session
from models.blog_post import BlogPost
from models.calendar import CalendarEntry
from models.performance_report import PerformanceReport

__all__ = [
    "Base", "TimestampMixin", "init_db", "engine", "async_session",
    "BlogPost", "CalendarEntry", "PerformanceReport",
]
