"""
ContentEngine - Recomendaciones locales.
Convierte las métricas del analizador en acciones concretas para el redactor.
"""
from core.analyzer import MAX_KEYWORD_DENSITY

MIN_KEYWORD_DENSITY = 0.5
MIN_READABILITY = 60
MIN_WORD_COUNT = 300


def generate_recommendations(
    keyword_density: float,
    readability_score: float,
    has_heading_structure: bool,
    word_count: int,
) -> list[str]:
    """
    Evalúa las reglas en orden fijo: densidad → legibilidad → headings → longitud.

    No trunca: el optimizador decide cuántas conservar tras mezclar con las
    recomendaciones externas.
    """
    recommendations = []

    if keyword_density < MIN_KEYWORD_DENSITY:
        recommendations.append(
            f"Increase keyword density (currently {keyword_density:.2f}%)"
        )
    # Inalcanzable mientras keyword_density tenga tope en 3.0; se conserva
    # por si el tope se levanta.
    if keyword_density > MAX_KEYWORD_DENSITY:
        recommendations.append(
            f"Reduce keyword stuffing (currently {keyword_density:.2f}%)"
        )

    if readability_score < MIN_READABILITY:
        recommendations.append("Improve readability - use shorter sentences")

    if not has_heading_structure:
        recommendations.append("Add proper heading structure (H2, H3 tags)")

    if word_count < MIN_WORD_COUNT:
        recommendations.append(f"Expand content (currently {word_count} words)")

    return recommendations
