"""
ContentEngine - Fixtures compartidas de tests.
"""
import os

# Antes de importar config/models: sin SQL en consola y sin red
os.environ["APP_DEBUG"] = "false"
os.environ["SEO_TOOL"] = "mock"
os.environ["SERPAPI_API_KEY"] = ""

from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool


@pytest.fixture
def now():
    """Referencia temporal fija para ventanas de historial."""
    return datetime(2026, 10, 18, 12, 0, 0)


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """BD SQLite temporal con todas las tablas creadas."""
    from models.base import Base
    import models  # noqa: F401  registra todas las tablas

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
