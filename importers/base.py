"""
Shared import loop.

Every importer walks its rows once, in order. A row either imports, is
skipped silently (header/title/note rows, only for ledger importers) or
produces one RowError. Exceptions raised while handling a row become
RowProcessingFailed and the loop moves on; only StoreUnavailableError
stops the batch.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence
import structlog

from config import settings
from exceptions import AppError, StoreUnavailableError
from importers.field_resolver import FieldResolver
from importers.row_classifier import is_header_or_title_row
from importers.row_errors import RowError, RowProcessingFailed
from utils.text_utils import normalize_name

logger = structlog.get_logger(__name__)


@dataclass
class ImportResult:
    """Outcome of one importer run."""
    imported: int = 0
    errors: list[RowError] = field(default_factory=list)
    skipped: int = 0

    @property
    def processed(self) -> int:
        return self.imported + len(self.errors) + self.skipped

    def error_messages(self) -> list[str]:
        return [error.format() for error in self.errors]


class BatchLookup:
    """
    Records created or matched during the current request.

    Keys are (entity, key_kind, normalized value), e.g.
    ("customer", "name", "ACME SA") -> customer id. Consulted before the
    store so repeated names in one batch resolve to the same record.
    """

    def __init__(self):
        self._ids: dict[tuple[str, str, str], str] = {}
        self._names: dict[str, dict[str, str]] = {}

    @staticmethod
    def _normalize(key_kind: str, value: str) -> Optional[str]:
        if key_kind == "name":
            return normalize_name(value)
        value = value.strip()
        return value.lower() if value else None

    def get(self, entity: str, key_kind: str, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        key = self._normalize(key_kind, value)
        if key is None:
            return None
        return self._ids.get((entity, key_kind, key))

    def remember(self, entity: str, record_id: str, **keys: Optional[str]) -> None:
        for key_kind, value in keys.items():
            if not value:
                continue
            key = self._normalize(key_kind, value)
            if key is None:
                continue
            self._ids[(entity, key_kind, key)] = record_id
            if key_kind == "name":
                self._names.setdefault(entity, {})[key] = record_id

    def find_name_containing(self, entity: str, fragment: str) -> Optional[str]:
        """Id of the first remembered record whose name contains fragment."""
        needle = normalize_name(fragment)
        if not needle:
            return None
        for name, record_id in self._names.get(entity, {}).items():
            if needle in name:
                return record_id
        return None


@dataclass
class ImportContext:
    """Request-scoped state shared by every row of one import."""
    company_id: str
    user_id: Optional[str] = None
    lookup: BatchLookup = field(default_factory=BatchLookup)
    cache: dict[str, Any] = field(default_factory=dict)
    default_country: str = field(default_factory=lambda: settings.default_country)
    invoice_due_days: int = field(default_factory=lambda: settings.invoice_due_days)
    row_error_dump_chars: int = field(default_factory=lambda: settings.row_error_dump_chars)


class BaseImporter:
    """
    Base for the per-entity importers.

    Subclasses set `import_type` and implement import_row(), returning
    None on success or a RowError.
    """

    import_type: str = ""
    skip_header_rows: bool = False

    def __init__(self, context: ImportContext):
        self.context = context

    @property
    def company_id(self) -> str:
        return self.context.company_id

    def run(
        self,
        rows: Sequence[dict[str, Any]],
        mappings: Optional[dict[str, str]] = None
    ) -> ImportResult:
        mappings = mappings or {}
        result = ImportResult()

        for index, row in enumerate(rows):
            if self.skip_header_rows and is_header_or_title_row(row):
                result.skipped += 1
                continue

            try:
                error = self.import_row(index, row, FieldResolver(row, mappings))
            except StoreUnavailableError:
                logger.error(
                    "import_aborted",
                    import_type=self.import_type,
                    row=index,
                    imported=result.imported
                )
                raise
            except Exception as e:
                message = e.message if isinstance(e, AppError) else str(e)
                error = RowProcessingFailed(index, message or "Error desconocido")
                logger.warning(
                    "import_row_failed",
                    import_type=self.import_type,
                    row=index,
                    error=message,
                    error_type=type(e).__name__
                )

            if error is None:
                result.imported += 1
            else:
                result.errors.append(error)

        return result

    def import_row(
        self,
        index: int,
        row: dict[str, Any],
        fields: FieldResolver
    ) -> Optional[RowError]:
        raise NotImplementedError
