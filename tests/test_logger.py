"""
ContentEngine - Tests de configuración de logging y arranque del worker.
"""
import logging

from core import celery_app as celery_module
from utils.logger import setup_logging


def test_setup_logging_returns_project_logger():
    logger = setup_logging()
    assert logger.name == "contentengine"
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_beat_schedule():
    schedule = celery_module.celery_app.conf.beat_schedule
    assert set(schedule) == {
        "generate-monthly-calendar",
        "weekly-performance-analysis",
        "monthly-recommendations",
    }
    assert schedule["generate-monthly-calendar"]["task"] == "core.tasks.calendar_gen.generate_monthly_calendar"


def test_run_async_returns_result():
    async def answer():
        return 42

    assert celery_module.run_async(answer()) == 42


def test_worker_init_creates_tables(monkeypatch):
    import models.base

    calls = []

    async def fake_init_db():
        calls.append("init_db")

    monkeypatch.setattr(models.base, "init_db", fake_init_db)
    celery_module.create_tables()
    assert calls == ["init_db"]
