"""
ContentEngine - Modelo de Blog Post publicado.
Historial que alimenta el ranking de keywords y el reporte de rendimiento.
"""
from typing import Optional
from datetime import datetime
from sqlalchemy import String, Integer, DateTime, Float
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin


class BlogPost(Base, TimestampMixin):
    """Post publicado con sus métricas de engagement."""
    __tablename__ = "blog_posts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    titulo: Mapped[str] = mapped_column(String(500), nullable=False)
    content_keywords: Mapped[str] = mapped_column(String(1000), default="")  # separadas por coma
    platform: Mapped[str] = mapped_column(String(30), default="blog")  # blog, linkedin, facebook, instagram
    published_on: Mapped[Optional[datetime]] = mapped_column(DateTime, index=True)

    # --- Métricas (se actualizan después de publicar) ---
    views: Mapped[int] = mapped_column(Integer, default=0)
    clicks: Mapped[int] = mapped_column(Integer, default=0)
    shares: Mapped[int] = mapped_column(Integer, default=0)
    comments: Mapped[int] = mapped_column(Integer, default=0)
    conversion_rate: Mapped[float] = mapped_column(Float, default=0.0)  # 0-1
    engagement_score: Mapped[Optional[int]] = mapped_column(Integer)  # 0-100, None = sin medir
    last_tracked: Mapped[Optional[datetime]] = mapped_column(DateTime)

    def to_historical(self):
        """Convierte a HistoricalPost para el motor."""
        from core.keyword_ranker import HistoricalPost
        return HistoricalPost(
            id=self.id,
            content_keywords=self.content_keywords or "",
            published_at=self.published_on,
            engagement_score=self.engagement_score,
            platform=self.platform,
        )

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id}, titulo='{self.titulo[:50]}', engagement={self.engagement_score})>"
