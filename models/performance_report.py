"""
ContentEngine - Reporte mensual de rendimiento.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import Integer, JSON, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class PerformanceReport(Base):
    """Recomendaciones generadas al cierre de cada mes."""
    __tablename__ = "performance_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    recommendations: Mapped[Optional[dict]] = mapped_column(JSON, default=dict)
    top_content_ids: Mapped[Optional[list]] = mapped_column(JSON, default=list)

    def __repr__(self) -> str:
        return f"<PerformanceReport(id={self.id}, fecha='{self.report_date}')>"
