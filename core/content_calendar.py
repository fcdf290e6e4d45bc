"""
ContentEngine - Constructor del calendario editorial.

A partir de las keywords rankeadas:
  1. Genera una idea por keyword rotando tipos de contenido.
  2. Calcula los días óptimos del mes (martes, miércoles y jueves).
  3. Crea un ContentItem por (idea, plataforma), repartidos cíclicamente
     sobre los días óptimos.

Todos los items nacen en estado `scheduled`. El avance posterior
(draft → seo_optimized → published) lo hacen otras etapas del pipeline.
"""
import calendar
import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Sequence, Union

from core.exceptions import InvalidStatusTransition
from core.keyword_ranker import RankedKeyword

CONTENT_TYPES = [
    "How-to Guide",
    "Case Study",
    "Tips & Tricks",
    "Industry News",
    "Best Practices",
]

# date.isoweekday(): lunes=1 ... domingo=7
OPTIMAL_WEEKDAYS = {2, 3, 4}  # martes, miércoles, jueves


class Platform(str, Enum):
    BLOG = "blog"
    LINKEDIN = "linkedin"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"


DEFAULT_PLATFORMS = [Platform.BLOG, Platform.LINKEDIN]


class ContentStatus(str, Enum):
    """Estados de un ContentItem, solo hacia adelante."""
    SCHEDULED = "scheduled"
    DRAFT = "draft"
    SEO_OPTIMIZED = "seo_optimized"
    PUBLISHED = "published"

    @property
    def order(self) -> int:
        return list(ContentStatus).index(self)

    def can_advance_to(self, target: "ContentStatus") -> bool:
        return ContentStatus(target).order == self.order + 1

    def advance(self, target: "ContentStatus") -> "ContentStatus":
        """
        Retorna el nuevo estado.

        Raises:
            InvalidStatusTransition: si target no es el estado inmediato siguiente.
        """
        target = ContentStatus(target)
        if not self.can_advance_to(target):
            raise InvalidStatusTransition(self.value, target.value)
        return target


@dataclass
class ContentIdea:
    keyword: str
    title: str
    description: str
    content_type: str
    platforms: list[Platform] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))


@dataclass
class ContentItem:
    """Unidad programada: un contenido, una plataforma, una fecha."""
    id: str
    title: str
    description: str
    keywords: list[str]
    publish_date: date
    platform: Platform
    status: ContentStatus = ContentStatus.SCHEDULED


def generate_content_ideas(
    keywords: Iterable[Union[RankedKeyword, str]],
    content_types: Sequence[str] = CONTENT_TYPES,
    platforms: Sequence[Platform] = DEFAULT_PLATFORMS,
) -> list[ContentIdea]:
    """Una idea por keyword; keywords adyacentes reciben distinto enfoque."""
    ideas = []
    for index, item in enumerate(keywords):
        keyword = item.keyword if isinstance(item, RankedKeyword) else item
        content_type = content_types[index % len(content_types)]
        ideas.append(ContentIdea(
            keyword=keyword,
            title=f"{content_type}: {keyword}",
            description=f"Comprehensive guide about {keyword}",
            content_type=content_type,
            platforms=[Platform(p) for p in platforms],
        ))
    return ideas


def optimal_publishing_days(month: int, year: int) -> list[date]:
    """Todos los martes, miércoles y jueves del mes, en orden."""
    _validate_month(month)
    days_in_month = calendar.monthrange(year, month)[1]
    days = []
    for day in range(1, days_in_month + 1):
        d = date(year, month, day)
        if d.isoweekday() in OPTIMAL_WEEKDAYS:
            days.append(d)
    return days


def build_schedule(
    ranked_keywords: Iterable[Union[RankedKeyword, str]],
    month: int,
    year: int,
    content_types: Sequence[str] = CONTENT_TYPES,
    platforms: Sequence[Platform] = DEFAULT_PLATFORMS,
) -> list[ContentItem]:
    """
    Calendario del mes: 2 items por keyword con las plataformas por defecto.

    La fecha de cada item es optimal_days[i % len(optimal_days)], donde i es
    su posición en la secuencia aplanada (idea, plataforma).

    Raises:
        ValueError: Si el mes no está entre 1 y 12.
    """
    _validate_month(month)
    if not content_types:
        raise ValueError("Se necesita al menos un tipo de contenido")

    ideas = generate_content_ideas(ranked_keywords, content_types, platforms)
    publishing_days = optimal_publishing_days(month, year)

    items = []
    for idea in ideas:
        for platform in idea.platforms:
            items.append(ContentItem(
                id=uuid.uuid4().hex,
                title=idea.title,
                description=idea.description,
                keywords=[idea.keyword],
                publish_date=publishing_days[len(items) % len(publishing_days)],
                platform=platform,
                status=ContentStatus.SCHEDULED,
            ))
    return items


def _validate_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Mes inválido: {month}")
