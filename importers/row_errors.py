"""
Row-level import errors.

Each failed row is recorded as one of these variants with its structured
data. Turning them into the user-facing Spanish line ("Fila 3: ...") only
happens in format(), at the API boundary.
"""

from dataclasses import dataclass, field
import json
from typing import Any

# Spreadsheet row 1 is the header, and row_index is 0-based
ROW_NUMBER_OFFSET = 2


@dataclass(frozen=True)
class RowError:
    """Base for every row error. row_index is the position in the submitted data."""
    row_index: int

    @property
    def row_number(self) -> int:
        return self.row_index + ROW_NUMBER_OFFSET

    def reason(self) -> str:
        raise NotImplementedError

    def format(self) -> str:
        return f"Fila {self.row_number}: {self.reason()}"

    def to_dict(self) -> dict:
        return {
            "row": self.row_number,
            "kind": type(self).__name__,
            "message": self.reason(),
        }


@dataclass(frozen=True)
class MissingRequiredField(RowError):
    """A required field could not be resolved (name, customer)."""
    field_name: str = "name"

    _MESSAGES = {
        "name": "Nombre requerido",
        "customer": "Cliente requerido",
    }

    def reason(self) -> str:
        return self._MESSAGES.get(self.field_name, f"Campo requerido: {self.field_name}")


@dataclass(frozen=True)
class UnresolvedAmount(RowError):
    """No amount anywhere in the row. Carries the raw columns for diagnosis."""
    columns: dict[str, Any] = field(default_factory=dict)
    max_chars: int = 200

    def reason(self) -> str:
        dump = ", ".join(
            f"{key}={json.dumps(value, ensure_ascii=False, default=str)}"
            for key, value in self.columns.items()
        )
        return f"Monto no encontrado. Valores: {dump[:self.max_chars]}"


@dataclass(frozen=True)
class InvalidTotal(RowError):
    """Invoice total missing, unparseable or not positive."""

    def reason(self) -> str:
        return "Total inválido o requerido"


@dataclass(frozen=True)
class RowProcessingFailed(RowError):
    """Any other exception raised while processing the row."""
    message: str = "Error desconocido"

    def reason(self) -> str:
        return self.message or "Error desconocido"
