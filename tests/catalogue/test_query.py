"""Tests for catalogue query construction."""

import pytest

from catalogue_api.catalogue.query import (
    INT_MAX,
    INT_MIN,
    MATCH_ALL,
    FilterParams,
    Membership,
    QueryBuilder,
    Range,
    SearchParams,
    TextMatch,
    as_list,
    build_filter_predicate,
    build_search_predicate,
    parse_int,
    split_csv,
)


class TestParameterParsing:
    """Tests for raw parameter helpers."""

    def test_split_csv(self) -> None:
        """Comma-separated values split into a list."""
        assert split_csv("Electronics,Books") == ["Electronics", "Books"]

    def test_split_csv_drops_blank_pieces(self) -> None:
        """Blank pieces and surrounding whitespace are dropped."""
        assert split_csv(" Electronics , ,Books,") == ["Electronics", "Books"]
        assert split_csv("") == []
        assert split_csv(None) == []

    def test_as_list_normalizes_single_value(self) -> None:
        """A single value becomes a one-element list."""
        assert as_list("Acme") == ["Acme"]
        assert as_list(["Acme", "Globex"]) == ["Acme", "Globex"]
        assert as_list(None) == []
        assert as_list(["", "  "]) == []

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("10", 10),
            (" 42 ", 42),
            ("-3", -3),
            ("10.5", 10),
            ("12px", 12),
            ("abc", None),
            ("px12", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_int(self, raw: str | None, expected: int | None) -> None:
        """The leading integer is used; values without one become None."""
        assert parse_int(raw) == expected


class TestQueryBuilder:
    """Tests for QueryBuilder."""

    def test_empty_builder_matches_all(self) -> None:
        """No clauses means no constraint."""
        predicate = QueryBuilder().build()
        assert predicate.matches_all
        assert predicate == MATCH_ALL

    def test_blank_inputs_add_no_clauses(self) -> None:
        """Blank text, empty lists and open ranges are ignored."""
        predicate = (
            QueryBuilder()
            .text("   ")
            .member_of("type", [])
            .between("price", None, None)
            .build()
        )
        assert predicate.matches_all

    def test_clauses_are_kept_in_order(self) -> None:
        """Clauses are combined in the order they were added."""
        predicate = (
            QueryBuilder()
            .text("widget")
            .member_of("type", ["HardGood"])
            .between("price", 10, 50)
            .build()
        )
        assert predicate.clauses == (
            TextMatch(term="widget"),
            Membership(field="type", values=("HardGood",)),
            Range(field="price", minimum=10, maximum=50),
        )

    def test_rejects_unknown_fields(self) -> None:
        """Only facet fields accept membership and numeric fields accept ranges."""
        with pytest.raises(ValueError):
            QueryBuilder().member_of("price", ["10"])
        with pytest.raises(ValueError):
            QueryBuilder().between("name", 1, 2)


class TestSearchPredicate:
    """Tests for free-text + faceted search predicates."""

    def test_no_parameters_matches_all(self) -> None:
        """Absent parameters impose no constraint."""
        assert build_search_predicate(SearchParams()).matches_all

    def test_empty_parameters_match_all(self) -> None:
        """Empty strings are treated as absent, never as match-nothing."""
        params = SearchParams(search="", category="", type=",", manufacturer="", min_price="")
        assert build_search_predicate(params).matches_all

    def test_search_text_covers_name_model_description_and_sku(self) -> None:
        """Free text becomes one OR clause over the searchable fields."""
        predicate = build_search_predicate(SearchParams(search="Widget"))
        assert predicate.clauses == (
            TextMatch(term="Widget", fields=("name", "model", "description", "sku")),
        )

    def test_facets_split_on_comma(self) -> None:
        """Each facet becomes a membership clause."""
        predicate = build_search_predicate(
            SearchParams(category="Electronics,Books", type="HardGood", manufacturer="Acme,Globex")
        )
        assert predicate.clauses == (
            Membership(field="category", values=("Electronics", "Books")),
            Membership(field="type", values=("HardGood",)),
            Membership(field="manufacturer", values=("Acme", "Globex")),
        )

    def test_price_bounds_merge_into_one_range(self) -> None:
        """Both bounds produce a single range clause."""
        predicate = build_search_predicate(SearchParams(min_price="10", max_price="50"))
        assert predicate.clauses == (Range(field="price", minimum=10, maximum=50),)

    def test_min_price_alone_has_no_upper_bound(self) -> None:
        """Supplying only minPrice leaves the maximum open."""
        predicate = build_search_predicate(SearchParams(min_price="10"))
        assert predicate.clauses == (Range(field="price", minimum=10, maximum=None),)

    def test_unparseable_price_is_ignored(self) -> None:
        """Bounds that fail to parse are treated as absent."""
        predicate = build_search_predicate(SearchParams(min_price="cheap", max_price="50"))
        assert predicate.clauses == (Range(field="price", minimum=None, maximum=50),)

    def test_zero_min_price_is_a_bound(self) -> None:
        """Zero is a valid bound, not an absent value."""
        predicate = build_search_predicate(SearchParams(min_price="0"))
        assert predicate.clauses == (Range(field="price", minimum=0, maximum=None),)


class TestFilterPredicate:
    """Tests for discrete facet filter predicates."""

    def test_no_filters_matches_all(self) -> None:
        """No filters means everything matches."""
        assert build_filter_predicate(FilterParams()).matches_all

    def test_single_and_repeated_values(self) -> None:
        """Single values and lists produce the same membership clauses."""
        single = build_filter_predicate(FilterParams(type="HardGood"))
        repeated = build_filter_predicate(FilterParams(type=["HardGood"]))
        assert single == repeated
        assert single.clauses == (Membership(field="type", values=("HardGood",)),)

    def test_category_filter_uses_membership(self) -> None:
        """Category filters test entry names like the search mode does."""
        predicate = build_filter_predicate(
            FilterParams(category=["Electronics", "Books"], manufacturer="Acme")
        )
        assert predicate.clauses == (
            Membership(field="category", values=("Electronics", "Books")),
            Membership(field="manufacturer", values=("Acme",)),
        )

    def test_filter_and_search_share_clause_types(self) -> None:
        """Both modes build identical clauses for the same facet."""
        search = build_search_predicate(SearchParams(manufacturer="Acme,Globex"))
        filtered = build_filter_predicate(FilterParams(manufacturer=["Acme", "Globex"]))
        assert search == filtered


class TestParseIntRange:
    """Tests for the storage range check in parse_int."""

    def test_bounds_are_accepted(self) -> None:
        """Both ends of the integer column range parse."""
        assert parse_int(str(INT_MAX)) == INT_MAX
        assert parse_int(str(INT_MIN)) == INT_MIN
        assert parse_int(INT_MAX) == INT_MAX

    @pytest.mark.parametrize(
        "raw",
        [str(INT_MAX + 1), str(INT_MIN - 1), "3000000000", "99999999999999999999", "9" * 5000, 2**40],
    )
    def test_out_of_range_values_become_none(self, raw: str | int) -> None:
        """Values the integer columns cannot hold are treated as absent."""
        assert parse_int(raw) is None

    def test_out_of_range_price_bound_is_ignored(self) -> None:
        """An unstorable bound imposes no constraint."""
        predicate = build_search_predicate(
            SearchParams(min_price="10", max_price="99999999999999999999")
        )
        assert predicate.clauses == (Range("price", 10, None),)
