"""
ContentEngine - Puntuación SEO compuesta (0-100).

Cuatro cubetas de 25 puntos:
  - Densidad:        25 si 0.5 < d < 3, si no 10 (penalización plana)
  - Legibilidad:     proporcional, readability/100 * 25
  - Headings:        25 con estructura H2, si no 10
  - Recomendaciones: 25 - 5 por recomendación, mínimo 0
"""
import math


def round_half_up(value: float) -> int:
    """Redondeo al entero más cercano, .5 hacia arriba."""
    return int(math.floor(value + 0.5))


def calculate_seo_score(
    keyword_density: float,
    readability_score: float,
    has_heading_structure: bool,
    recommendation_count: int,
) -> int:
    """Puntuación global. Las cubetas garantizan el rango [0, 100]."""
    score = 0.0

    # Densidad (25)
    if 0.5 < keyword_density < 3:
        score += 25
    else:
        score += 10

    # Legibilidad (25)
    score += (readability_score / 100) * 25

    # Estructura (25)
    score += 25 if has_heading_structure else 10

    # Penalización por recomendaciones (25)
    score += max(0, 25 - recommendation_count * 5)

    return round_half_up(score)
