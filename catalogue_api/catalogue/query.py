"""Catalogue query construction.

Client parameters arrive as loosely-typed strings. They are turned into a
small typed predicate made of three clause kinds:

- ``TextMatch``: case-insensitive substring match over several fields (OR).
- ``Membership``: field value is one of a list.
- ``Range``: inclusive numeric bounds, either side optional.

A ``Predicate`` is the AND of its clauses; an empty predicate matches every
record. The repository lowers predicates into SQL, and the same predicate
object is used for both the page fetch and the total count.
"""

import re
from dataclasses import dataclass, field

# Fields searched by free text; sku is matched on its string form.
SEARCH_FIELDS = ("name", "model", "description", "sku")

# Fields that accept membership tests.
FACET_FIELDS = ("category", "type", "manufacturer")

# Fields that accept range bounds.
RANGE_FIELDS = ("price", "shipping")

# Storage range of the integer columns (sku, price, shipping).
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive substring match of term against any of fields."""

    term: str
    fields: tuple[str, ...] = SEARCH_FIELDS


@dataclass(frozen=True)
class Membership:
    """Field value must be one of values.

    For ``category`` the item matches when any of its category entries has
    a name in values.
    """

    field: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class Range:
    """Inclusive bounds on a numeric field."""

    field: str
    minimum: int | None = None
    maximum: int | None = None


Clause = TextMatch | Membership | Range


@dataclass(frozen=True)
class Predicate:
    """Conjunction of clauses."""

    clauses: tuple[Clause, ...] = ()

    @property
    def matches_all(self) -> bool:
        """Whether the predicate imposes no constraint."""
        return not self.clauses


MATCH_ALL = Predicate()


@dataclass
class SearchParams:
    """Raw free-text + faceted search parameters.

    Attributes:
        search: Free text.
        category: Comma-separated category names.
        type: Comma-separated types.
        manufacturer: Comma-separated manufacturers.
        min_price: Inclusive lower price bound.
        max_price: Inclusive upper price bound.
    """

    search: str | None = None
    category: str | None = None
    type: str | None = None
    manufacturer: str | None = None
    min_price: str | None = None
    max_price: str | None = None


@dataclass
class FilterParams:
    """Raw discrete facet filter parameters (single value or repeated)."""

    category: str | list[str] | None = None
    type: str | list[str] | None = None
    manufacturer: str | list[str] | None = None


@dataclass
class QueryBuilder:
    """Accumulates clauses, dropping the ones that would not constrain.

    Example usage:
        predicate = (
            QueryBuilder()
            .text("widget")
            .member_of("type", ["HardGood"])
            .between("price", 10, None)
            .build()
        )
    """

    clauses: list[Clause] = field(default_factory=list)

    def text(self, term: str | None) -> "QueryBuilder":
        """Add a free-text clause unless term is blank."""
        if term is not None and term.strip():
            self.clauses.append(TextMatch(term=term.strip()))
        return self

    def member_of(self, field_name: str, values: list[str]) -> "QueryBuilder":
        """Add a membership clause unless values is empty."""
        if field_name not in FACET_FIELDS:
            raise ValueError(f"Unsupported membership field: {field_name}")
        if values:
            self.clauses.append(Membership(field=field_name, values=tuple(values)))
        return self

    def between(
        self,
        field_name: str,
        minimum: int | None,
        maximum: int | None,
    ) -> "QueryBuilder":
        """Add a range clause unless both bounds are absent."""
        if field_name not in RANGE_FIELDS:
            raise ValueError(f"Unsupported range field: {field_name}")
        if minimum is not None or maximum is not None:
            self.clauses.append(Range(field=field_name, minimum=minimum, maximum=maximum))
        return self

    def build(self) -> Predicate:
        """Freeze accumulated clauses into a predicate."""
        return Predicate(clauses=tuple(self.clauses))


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated parameter, dropping blank pieces."""
    if not value:
        return []
    return [piece.strip() for piece in value.split(",") if piece.strip()]


def as_list(value: str | list[str] | None) -> list[str]:
    """Normalize a single or repeated parameter to a list of non-blank values."""
    if value is None:
        return []
    values = value if isinstance(value, list) else [value]
    return [v.strip() for v in values if v is not None and v.strip()]


def parse_int(value: str | int | None) -> int | None:
    """Parse the leading integer of a parameter.

    Trailing text is ignored, so "10.5" and "12px" give 10 and 12. Values
    without leading digits, or outside the storage range, give None.
    """
    if value is None:
        return None
    if isinstance(value, int):
        parsed = value
    else:
        match = _LEADING_INT.match(value)
        if match is None:
            return None
        try:
            parsed = int(match.group(1))
        except ValueError:
            # Digit strings beyond the interpreter's conversion limit.
            return None
    if not INT_MIN <= parsed <= INT_MAX:
        return None
    return parsed


def build_search_predicate(params: SearchParams) -> Predicate:
    """Build the predicate for free-text + faceted search.

    Args:
        params: Raw search parameters.

    Returns:
        Predicate combining all present constraints with AND.
    """
    builder = QueryBuilder().text(params.search)
    builder.member_of("category", split_csv(params.category))
    builder.member_of("type", split_csv(params.type))
    builder.member_of("manufacturer", split_csv(params.manufacturer))
    builder.between("price", parse_int(params.min_price), parse_int(params.max_price))
    return builder.build()


def build_filter_predicate(params: FilterParams) -> Predicate:
    """Build the predicate for discrete facet filtering.

    Args:
        params: Raw filter parameters.

    Returns:
        Predicate; matches everything when no filter is present.
    """
    builder = QueryBuilder()
    builder.member_of("category", as_list(params.category))
    builder.member_of("type", as_list(params.type))
    builder.member_of("manufacturer", as_list(params.manufacturer))
    return builder.build()
