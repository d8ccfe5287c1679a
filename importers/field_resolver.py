"""
Field resolver: finds the cell holding a target field in a loosely structured row.

Resolution is a chain of strategies tried in priority order; the first one
that yields a value wins:

1. ExplicitMappingStrategy    - the user mapped a column to this field
2. NameSimilarityStrategy     - a column label resembles one of the synonyms
3. PlaceholderScanStrategy    - text fields only: first text cell under a
                                header-less column (__EMPTY, Unnamed: 3, ...)
4. MagnitudeHeuristicStrategy - numeric fields only: the largest number
                                in the row

A None result means "field not found", never zero.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Union

import structlog

from importers.coercion import parse_amount
from utils.text_utils import normalize_label

logger = structlog.get_logger(__name__)

ResolvedValue = Union[str, float]

PLACEHOLDER_MARKERS: tuple[str, ...] = ("EMPTY", "Unnamed:")


class FieldKind(str, Enum):
    """Type of value a field resolves to."""
    TEXT = "text"
    NUMBER = "number"


@dataclass(frozen=True)
class FieldRequest:
    """Everything a strategy needs to look up one field."""
    candidate_keys: Sequence[str]
    mappings: dict[str, str] = field(default_factory=dict)
    kind: FieldKind = FieldKind.TEXT
    allow_zero: bool = False
    # False limits resolution to mapped and similarly named columns
    scan_row: bool = True

    def accept_number(self, value: Any) -> Optional[float]:
        """Parse value and apply the positivity constraint."""
        number = parse_amount(value)
        if number is None:
            return None
        if number > 0 or (self.allow_zero and number == 0):
            return number
        return None

    def accept(self, value: Any) -> Optional[ResolvedValue]:
        """Turn a raw cell into this request's value type, or None."""
        if _is_blank(value):
            return None
        if self.kind is FieldKind.NUMBER:
            return self.accept_number(value)
        return str(value).strip()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and value != value:  # NaN
        return True
    return isinstance(value, str) and not value.strip()


def is_placeholder_label(label: str) -> bool:
    """True for machine-generated labels of columns without a real header."""
    return any(marker in label for marker in PLACEHOLDER_MARKERS)


# ===================
# STRATEGIES
# ===================

class ResolverStrategy:
    """One way of locating a field in a row."""

    name = "base"
    kinds: tuple[FieldKind, ...] = (FieldKind.TEXT, FieldKind.NUMBER)
    scans_row = False

    def applies_to(self, request: FieldRequest) -> bool:
        if self.scans_row and not request.scan_row:
            return False
        return request.kind in self.kinds

    def attempt(self, row: dict[str, Any], request: FieldRequest) -> Optional[ResolvedValue]:
        raise NotImplementedError


class ExplicitMappingStrategy(ResolverStrategy):
    """Use the column the user mapped to one of the candidate fields."""

    name = "explicit_mapping"

    def attempt(self, row, request):
        wanted = {key.lower() for key in request.candidate_keys}
        for source_column, target_field in request.mappings.items():
            if not target_field or target_field.lower() not in wanted:
                continue
            value = request.accept(row.get(source_column))
            if value is not None:
                return value
        return None


class NameSimilarityStrategy(ResolverStrategy):
    """Match column labels against synonyms by equality or containment."""

    name = "name_similarity"

    def attempt(self, row, request):
        keys = [k for k in (normalize_label(key) for key in request.candidate_keys) if k]
        for label, raw_value in row.items():
            normalized = normalize_label(label)
            if not normalized:
                continue
            if not any(_labels_match(normalized, key) for key in keys):
                continue
            value = request.accept(raw_value)
            if value is not None:
                return value
        return None


def _labels_match(label: str, key: str) -> bool:
    return label == key or key in label or label in key


class PlaceholderScanStrategy(ResolverStrategy):
    """First non-numeric text under a header-less column."""

    name = "placeholder_scan"
    kinds = (FieldKind.TEXT,)
    scans_row = True

    def attempt(self, row, request):
        for label, raw_value in row.items():
            if not is_placeholder_label(str(label)) or _is_blank(raw_value):
                continue
            if parse_amount(raw_value) is not None:
                continue
            return str(raw_value).strip()
        return None


class MagnitudeHeuristicStrategy(ResolverStrategy):
    """The largest acceptable number anywhere in the row."""

    name = "magnitude_heuristic"
    kinds = (FieldKind.NUMBER,)
    scans_row = True

    def attempt(self, row, request):
        numbers = [
            number
            for number in (request.accept_number(value) for value in row.values() if not _is_blank(value))
            if number is not None
        ]
        if not numbers:
            return None
        return max(numbers)


DEFAULT_STRATEGIES: tuple[ResolverStrategy, ...] = (
    ExplicitMappingStrategy(),
    NameSimilarityStrategy(),
    PlaceholderScanStrategy(),
    MagnitudeHeuristicStrategy(),
)


class FieldResolver:
    """
    Runs the strategy chain for one row.

    Usage:
        resolver = FieldResolver(row, mappings)
        name = resolver.text(["name", "nombre"])
        amount = resolver.number(["amount", "monto"], allow_zero=True)
    """

    def __init__(
        self,
        row: dict[str, Any],
        mappings: Optional[dict[str, str]] = None,
        strategies: Sequence[ResolverStrategy] = DEFAULT_STRATEGIES,
    ):
        self.row = row
        self.mappings = mappings or {}
        self.strategies = strategies

    def resolve(self, request: FieldRequest) -> Optional[ResolvedValue]:
        for strategy in self.strategies:
            if not strategy.applies_to(request):
                continue
            value = strategy.attempt(self.row, request)
            if value is not None:
                logger.debug(
                    "field_resolved",
                    strategy=strategy.name,
                    candidates=list(request.candidate_keys[:3]),
                )
                return value
        return None

    def text(self, candidate_keys: Sequence[str]) -> Optional[str]:
        request = FieldRequest(candidate_keys, self.mappings, FieldKind.TEXT)
        return self.resolve(request)

    def number(
        self,
        candidate_keys: Sequence[str],
        allow_zero: bool = False,
        scan_row: bool = True,
    ) -> Optional[float]:
        request = FieldRequest(candidate_keys, self.mappings, FieldKind.NUMBER, allow_zero, scan_row)
        return self.resolve(request)


def resolve_field(
    row: dict[str, Any],
    mappings: Optional[dict[str, str]],
    candidate_keys: Sequence[str],
    allow_zero: bool = False,
    kind: FieldKind = FieldKind.TEXT,
) -> Optional[ResolvedValue]:
    """Resolve a single field; see FieldResolver for the strategy order."""
    request = FieldRequest(candidate_keys, mappings or {}, kind, allow_zero)
    return FieldResolver(row, mappings).resolve(request)
