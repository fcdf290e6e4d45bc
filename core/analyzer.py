"""
ContentEngine - Analizador de legibilidad y densidad.

Funciones puras sobre el texto de un borrador (Markdown):
  - keyword_density: % de tokens que contienen la keyword (tope 3.0)
  - readability_score: Flesch-Kincaid aproximado, escalado a 0-100
  - has_heading_structure: al menos dos H2 (`## `)

Sin logging ni estado: se llaman desde el optimizador y desde los proveedores.
"""
import re

# Tope deliberado de la densidad. Los llamadores NO deben asumir valores mayores.
MAX_KEYWORD_DENSITY = 3.0

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_NON_LETTERS = re.compile(r"[^a-z]")
_VOWEL_RUNS = re.compile(r"[aeiou]+")
_H2_LINE = re.compile(r"^## ", re.MULTILINE)


def count_words(text: str) -> int:
    """Cuenta palabras separadas por espacios."""
    return len(text.split())


def keyword_density(text: str, keyword: str) -> float:
    """
    Densidad de la keyword en porcentaje.

    Cuenta los tokens que CONTIENEN la keyword (substring, no coincidencia
    exacta), así que "seo-friendly" cuenta para "seo".
    """
    words = text.lower().split()
    if not words:
        return 0.0
    keyword_lower = keyword.lower().strip()
    if not keyword_lower:
        return 0.0
    count = sum(1 for w in words if keyword_lower in w)
    density = (count / len(words)) * 100
    return min(density, MAX_KEYWORD_DENSITY)


def estimate_syllables(word: str) -> int:
    """Sílabas aproximadas: grupos de vocales, mínimo 1 por palabra."""
    cleaned = _NON_LETTERS.sub("", word.lower())
    return max(1, len(_VOWEL_RUNS.findall(cleaned)))


def count_syllables(text: str) -> int:
    return sum(estimate_syllables(w) for w in text.split())


def readability_score(text: str) -> float:
    """
    Legibilidad 0-100 derivada del grado Flesch-Kincaid.

    grade = 0.39 * (palabras/oraciones) + 11.8 * (sílabas/palabras) - 15.59
    score = clamp(100 - grade * 5, 0, 100)
    """
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    words = text.split()
    if not sentences or not words:
        return 0.0

    syllables = count_syllables(text)
    grade = (
        0.39 * (len(words) / len(sentences))
        + 11.8 * (syllables / len(words))
        - 15.59
    )
    return max(0.0, min(100.0, 100 - grade * 5))


def has_heading_structure(text: str) -> bool:
    """True si hay al menos 2 líneas que empiezan con exactamente `## `."""
    return len(_H2_LINE.findall(text)) >= 2
