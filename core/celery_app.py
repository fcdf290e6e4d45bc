"""
ContentEngine - Configuración de Celery.
Disparador periódico del motor: calendario mensual y análisis de rendimiento.
"""
import asyncio

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging as celery_setup_logging, worker_init

from config import get_settings
from utils.logger import setup_logging

settings = get_settings()

# --- Instancia principal ---
celery_app = Celery("contentengine")

celery_app.conf.update(
    broker_url=settings.redis_url,
    result_backend=settings.redis_url,
    timezone=settings.timezone,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    task_track_started=True,
    task_acks_late=True,
    broker_connection_timeout=5,
    broker_connection_retry_on_startup=False,
    redis_socket_connect_timeout=5,
    redis_socket_timeout=5,
)

# --- Auto-discover de tareas ---
celery_app.autodiscover_tasks(["core.tasks"])

# --- Beat schedule (tareas periódicas) ---
celery_app.conf.beat_schedule = {
    # Calendario editorial el día 1 de cada mes a las 9:00 AM
    "generate-monthly-calendar": {
        "task": "core.tasks.calendar_gen.generate_monthly_calendar",
        "schedule": crontab(hour=9, minute=0, day_of_month=1),
    },
    # Análisis de rendimiento cada domingo a las 11:00 PM
    "weekly-performance-analysis": {
        "task": "core.tasks.analytics.weekly_performance_analysis",
        "schedule": crontab(hour=23, minute=0, day_of_week=0),
    },
    # Reporte mensual: corre días 28-31 y solo actúa el último día del mes
    "monthly-recommendations": {
        "task": "core.tasks.analytics.monthly_recommendations_report",
        "schedule": crontab(hour=22, minute=0, day_of_month="28-31"),
    },
}


# --- Helper para ejecutar coroutines async desde tareas síncronas de Celery ---
def run_async(coro):
    """
    Ejecuta una coroutine async desde un contexto síncrono (Celery worker).
    Necesario porque SQLAlchemy y el proveedor SEO usan async pero Celery es síncrono.

    Uso:
        @celery_app.task
        def my_task():
            result = run_async(some_async_function())
            return result
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


# --- Arranque del worker ---
@celery_setup_logging.connect
def configure_logging(**kwargs):
    """Reemplaza el logging de Celery por el RichHandler del proyecto."""
    setup_logging()


@worker_init.connect
def create_tables(**kwargs):
    """Crea las tablas antes de que el worker acepte tareas."""
    from models.base import init_db
    run_async(init_db())
