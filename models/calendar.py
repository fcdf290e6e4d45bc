"""
ContentEngine - Modelo CalendarEntry.
Representa un ContentItem persistido del calendario editorial.
"""
from datetime import date
from typing import Optional
from sqlalchemy import String, Integer, Text, JSON, Date
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin


class CalendarEntry(Base, TimestampMixin):
    """Entrada del calendario editorial: un contenido, una plataforma, una fecha."""
    __tablename__ = "calendar_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)  # ContentItem.id

    # --- Contenido planificado ---
    titulo: Mapped[str] = mapped_column(String(500), nullable=False)
    descripcion: Mapped[Optional[str]] = mapped_column(Text)
    keywords: Mapped[Optional[list]] = mapped_column(JSON, default=list)

    # --- Programación ---
    fecha_programada: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    mes: Mapped[int] = mapped_column(Integer, nullable=False)
    anio: Mapped[int] = mapped_column(Integer, nullable=False)
    platform: Mapped[str] = mapped_column(String(30), nullable=False)  # blog, linkedin, facebook, instagram

    # --- Estado ---
    status: Mapped[str] = mapped_column(
        String(30), default="scheduled"
    )  # scheduled, draft, seo_optimized, published

    # --- Borrador y SEO ---
    borrador: Mapped[Optional[str]] = mapped_column(Text)
    seo_score: Mapped[Optional[int]] = mapped_column(Integer)  # 0-100
    seo_analysis: Mapped[Optional[dict]] = mapped_column(JSON)

    def __repr__(self) -> str:
        return f"<CalendarEntry(id={self.id}, titulo='{self.titulo[:40]}', fecha='{self.fecha_programada}', status='{self.status}')>"
