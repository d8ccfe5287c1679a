"""
Text utilities for handling Spanish text with accents.

Used for column-label matching, keyword detection and natural-key comparison.
"""

import re
import unicodedata
from typing import Optional

_LABEL_STRIP = re.compile(r"[^a-z0-9áéíóúñ]")


def strip_accents(text: str) -> str:
    """
    Remove accent marks, keeping the base characters.

    "Descripción" -> "Descripcion", "Año" -> "Ano"
    """
    # NFD separates base chars from combining accents (category 'Mn')
    normalized = unicodedata.normalize("NFD", text)
    return "".join(c for c in normalized if unicodedata.category(c) != "Mn")


def normalize_label(label: str) -> str:
    """
    Normalize a column label or synonym for similarity matching.

    Lower-cases and keeps only ASCII letters, digits, accented vowels and ñ:
    - "Fecha de Pago" -> "fechadepago"
    - "Teléfono (móvil)" -> "teléfonomóvil"
    - "__EMPTY_1" -> "empty1"
    """
    return _LABEL_STRIP.sub("", str(label).lower())


def normalize_name(name: Optional[str]) -> Optional[str]:
    """
    Normalize a record name for comparison/grouping.

    - "Decoración García" -> "DECORACION GARCIA"
    - "  PISOS  S.A.  " -> "PISOS S.A."

    Returns:
        Normalized uppercase ASCII string, or None if input is empty
    """
    if not name:
        return None

    name = " ".join(name.split())
    if not name:
        return None

    return strip_accents(name).upper()


def clean_text(value: Optional[str], max_length: int = 255) -> Optional[str]:
    """
    Clean free text for storage (preserves accents).

    - Strips whitespace
    - Truncates to max length
    - Returns None for empty/whitespace-only strings
    """
    if not value:
        return None

    value = value.strip()

    if not value:
        return None

    if len(value) > max_length:
        value = value[:max_length]

    return value


def escape_like(value: str) -> str:
    """
    Escape LIKE/ILIKE wildcards so user text matches literally.

    "50% off" -> "50\\% off"

    PostgREST reads "*" as "%" and offers no escape for it, so "*" becomes
    the single-character wildcard "_". Callers recheck such matches.
    """
    return (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
        .replace("*", "_")
    )
