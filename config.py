"""
ContentEngine - Configuración centralizada.
Carga variables de entorno y config.yaml.
"""
import yaml
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuración desde variables de entorno."""

    # App
    app_name: str = "ContentEngine"
    app_env: str = "development"
    app_debug: bool = True

    # Base de datos
    database_url: str = "sqlite+aiosqlite:///./contentengine.db"

    # Redis (broker de Celery)
    redis_url: str = "redis://localhost:6379/0"
    timezone: str = "America/Mexico_City"

    # Proveedor SEO externo: serpapi | mock
    seo_tool: str = "serpapi"
    serpapi_api_key: str = ""
    serpapi_base_url: str = "https://serpapi.com/search"
    seo_request_timeout: float = 10.0

    # Planificación
    history_window_months: int = 6
    max_ranked_keywords: int = 20

    # Puntuación mínima para marcar un borrador como seo_optimized
    seo_min_score: int = 60

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    """Retorna instancia cacheada de configuración."""
    return Settings()


def load_config() -> dict:
    """Carga configuración desde config.yaml."""
    config_path = Path(__file__).parent / "config.yaml"
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    return {}


@lru_cache
def get_config() -> dict:
    """Retorna configuración YAML cacheada."""
    return load_config()
