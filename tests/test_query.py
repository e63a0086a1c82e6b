"""Tests for search, category filtering and sorting"""

import locale

import pytest

from catalog.query import QueryEngine, QueryState, SortDirection, SortKey, configure_collation, query

from conftest import make_record


@pytest.fixture
def base():
    return [
        make_record(1, "Chicken Handi", "Chicken", "Indian"),
        make_record(2, "Beef Wellington", "Beef", "British"),
        make_record(3, "chick-fil-a sandwich", "Chicken", "American"),
        make_record(4, "Arrabiata", "Vegetarian", "Italian"),
        make_record(5, "Kentucky Fried Chicken", "Chicken", "American"),
        make_record(6, "Beef and Mustard Pie", "Beef", "British"),
    ]


class TestQueryState:
    """Test cases for QueryState transitions"""

    def test_defaults(self):
        state = QueryState()
        assert state.search_text == ""
        assert state.selected_categories == frozenset()
        assert state.sort_key == SortKey.NAME
        assert state.sort_direction == SortDirection.ASCENDING

    def test_toggle_same_key_flips_direction(self):
        state = QueryState().toggle_sort(SortKey.NAME)
        assert state.sort_direction == SortDirection.DESCENDING

        state = state.toggle_sort(SortKey.NAME)
        assert state.sort_direction == SortDirection.ASCENDING

    def test_new_key_resets_to_ascending(self):
        state = QueryState().toggle_sort(SortKey.NAME)

        state = state.toggle_sort(SortKey.AREA)

        assert state.sort_key == SortKey.AREA
        assert state.sort_direction == SortDirection.ASCENDING

    def test_toggle_category(self):
        state = QueryState().toggle_category("Beef").toggle_category("Chicken")
        assert state.selected_categories == {"Beef", "Chicken"}

        state = state.toggle_category("Beef")
        assert state.selected_categories == {"Chicken"}

    def test_transitions_do_not_mutate(self):
        original = QueryState()
        original.with_search_text("beef").toggle_category("Beef").toggle_sort(SortKey.AREA)
        assert original == QueryState()


class TestQueryEngine:
    """Test cases for QueryEngine"""

    def test_text_filter_matches_name_category_or_area(self, base):
        result = query(base, QueryState(search_text="BRIT"))
        assert {r.id for r in result} == {"2", "6"}

        result = query(base, QueryState(search_text="ital"))
        assert [r.id for r in result] == ["4"]

    def test_blank_text_keeps_everything(self, base):
        assert len(query(base, QueryState(search_text="   "))) == len(base)

    def test_category_filter(self, base):
        result = query(base, QueryState(selected_categories=frozenset({"Beef"})))
        assert {r.id for r in result} == {"2", "6"}

    def test_filters_compose_by_conjunction(self, base):
        """Text and category filters together equal their intersection"""
        text_only = query(base, QueryState(search_text="chick"))
        category_only = query(base, QueryState(selected_categories=frozenset({"Chicken"})))

        both = query(base, QueryState(search_text="chick", selected_categories=frozenset({"Chicken"})))

        expected = [r for r in text_only if r in category_only]
        assert both == expected

    def test_category_filter_keeps_relative_order(self):
        """Scenario: 7 Beef and 5 Chicken records, select Chicken"""
        records = [make_record(f"b{i}", "Same", "Beef") for i in range(7)]
        chicken = [make_record(f"c{i}", "Same", "Chicken") for i in range(5)]
        mixed = [records[0], chicken[0], records[1], records[2], chicken[1], chicken[2],
                 records[3], records[4], chicken[3], records[5], chicken[4], records[6]]

        result = query(mixed, QueryState(selected_categories=frozenset({"Chicken"})))

        assert result == chicken

    def test_sort_is_case_insensitive(self, base):
        result = query(base, QueryState())
        assert [r.name for r in result] == [
            "Arrabiata",
            "Beef and Mustard Pie",
            "Beef Wellington",
            "chick-fil-a sandwich",
            "Chicken Handi",
            "Kentucky Fried Chicken",
        ]

    def test_descending_is_exact_reverse_for_distinct_keys(self, base):
        ascending = query(base, QueryState())
        descending = query(base, QueryState().toggle_sort(SortKey.NAME))
        assert descending == list(reversed(ascending))

    def test_sort_is_stable_in_both_directions(self, base):
        """Ties keep their base order whichever way the key sorts"""
        state = QueryState(sort_key=SortKey.CATEGORY)

        ascending = query(base, state)
        descending = query(base, state.toggle_sort(SortKey.CATEGORY))

        assert [r.id for r in ascending] == ["2", "6", "1", "3", "5", "4"]
        assert [r.id for r in descending] == ["4", "1", "3", "5", "2", "6"]

    def test_blank_sort_value_sorts_first(self, base):
        records = base + [make_record(7, "Mystery", "", "")]

        result = query(records, QueryState(sort_key=SortKey.AREA))

        assert result[0].id == "7"

    def test_query_is_repeatable(self, base):
        state = QueryState(search_text="e", sort_key=SortKey.AREA, sort_direction=SortDirection.DESCENDING)
        engine = QueryEngine()

        assert engine.query(base, state) == engine.query(base, state)

    def test_query_does_not_mutate_base(self, base):
        snapshot = list(base)

        query(base, QueryState(search_text="beef").toggle_sort(SortKey.NAME))

        assert base == snapshot

    def test_accented_names_sort_with_base_letters(self):
        records = [make_record(1, "Zucchini"), make_record(2, "Éclair"), make_record(3, "apple")]

        result = query(records, QueryState())

        assert [r.name for r in result] == ["apple", "Éclair", "Zucchini"]

    def test_accent_only_difference_is_deterministic(self):
        records = [make_record(1, "Crème brûlée"), make_record(2, "Creme brulee"), make_record(3, "Cake")]

        ascending = query(records, QueryState())
        descending = query(records, QueryState().toggle_sort(SortKey.NAME))

        assert [r.id for r in ascending] == ["3", "2", "1"]
        assert descending == list(reversed(ascending))

    def test_search_text_is_not_trimmed_for_matching(self):
        records = [make_record(1, "Beef Pie"), make_record(2, "Pie and Mash")]

        result = query(records, QueryState(search_text="pie "))

        assert [r.id for r in result] == ["2"]


class TestConfigureCollation:
    """Test cases for configure_collation"""

    def test_applies_requested_locale(self, monkeypatch):
        calls = []

        def fake_setlocale(category, name):
            calls.append((category, name))
            return name or "en_US.UTF-8"

        monkeypatch.setattr(locale, "setlocale", fake_setlocale)

        assert configure_collation("fr_FR.UTF-8") == "fr_FR.UTF-8"
        assert calls == [(locale.LC_COLLATE, "fr_FR.UTF-8")]

    def test_falls_back_to_c_for_unknown_locale(self, monkeypatch):
        def fake_setlocale(category, name):
            if name != "C":
                raise locale.Error("unsupported locale setting")
            return "C"

        monkeypatch.setattr(locale, "setlocale", fake_setlocale)

        assert configure_collation("xx_XX.bogus") == "C"
