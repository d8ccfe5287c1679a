"""
Row classifier: tells real data rows apart from titles, headers, totals and notes.

Loosely built spreadsheets repeat header rows, add "TOTAL GASTOS" lines and
free-text notes between transactions. Those rows are skipped silently.
Ambiguous rows are treated as data: a bad data row surfaces as a row error,
a wrongly dropped row would vanish without trace.
"""

import re
from typing import Any

from importers.coercion import is_numeric_cell
from utils.text_utils import strip_accents

HEADER_KEYWORDS: tuple[str, ...] = (
    "descripcion", "description", "cantidades", "cantidad", "total gastos",
    "total ingresos", "observaciones", "notas", "monto", "amount", "fecha",
    "date", "pagos a", "ganancias neta", "gastos -ingresos", "gastos-ingresos",
    "estos montos", "basados a", "encabezado", "titulo", "header", "total",
    "subtotal", "resumen", "summary", "semanal", "semanales", "mensual",
    "mensuales", "nota:", "importante", "advertencia",
)

# A keyword counts only as a whole word: "Total:" matches, "Totalplay" does not
_KEYWORD_PATTERN = re.compile(
    "(?:"
    + "|".join(re.escape(keyword) for keyword in HEADER_KEYWORDS)
    + r")(?![a-z0-9])"
)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _starts_with_keyword(text: str) -> bool:
    folded = strip_accents(text).lower().strip()
    return _KEYWORD_PATTERN.match(folded) is not None


def is_header_or_title_row(row: dict[str, Any]) -> bool:
    """
    Decide whether a raw row is a header/title/note rather than data.

    Returns True when:
    - any textual cell starts with a header keyword (as a whole word), or
    - all but at most one cell are empty and none is numeric. A row made of
      a single non-empty text cell is the exception and stays data.
    """
    values = list(row.values())

    numeric_count = 0
    empty_count = 0

    for value in values:
        if _is_empty(value):
            empty_count += 1
            continue

        if is_numeric_cell(value):
            numeric_count += 1
            continue

        if _starts_with_keyword(str(value)):
            return True

    all_empty = empty_count == len(values)
    if (
        numeric_count == 0
        and empty_count >= len(values) - 1
        and (len(values) > 1 or all_empty)
    ):
        return True

    return False
