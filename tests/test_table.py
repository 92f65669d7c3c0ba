"""Tests for the table state engine: filters, sorting, columns, pagination."""

from datetime import date

import pytest

from csvview_core import Dataset, Settings
from csvview_core._types import SortDirection, SortState
from csvview_core.errors import InvalidPageSizeError, NoVisibleColumnsError, UnknownColumnError
from csvview_core.ingestion import parse
from csvview_core.table import (
    ClickSort,
    SetFilterText,
    SetPage,
    TableEngine,
    export_visible,
    get_visible_rows,
    initial_state,
    next_sort,
    reduce,
)


def _names(view):
    return [r["Name"] for r in view.rows]


class TestReducer:
    def test_state_is_not_mutated(self, names_dataset):
        state = initial_state(names_dataset)
        new_state = reduce(state, SetFilterText(column="Name", text="bob"))
        assert state.filters.text == {}
        assert new_state.filters.text == {"Name": "bob"}

    def test_blank_filter_is_not_stored(self, names_dataset):
        state = reduce(initial_state(names_dataset), SetFilterText(column="Name", text="   "))
        assert state.filters.text == {}
        assert not state.filters.is_active

    def test_unknown_column(self, names_dataset):
        state = initial_state(names_dataset)
        with pytest.raises(UnknownColumnError, match="Unknown column: Age"):
            reduce(state, ClickSort(column="Age"))
        with pytest.raises(KeyError):
            reduce(state, SetFilterText(column="Age", text="3"))

    def test_unsupported_action(self, names_dataset):
        with pytest.raises(TypeError):
            reduce(initial_state(names_dataset), "sort")

    def test_dataset_untouched(self, names_dataset):
        state = initial_state(names_dataset)
        state = reduce(state, ClickSort(column="Name"))
        get_visible_rows(state)
        assert [r["Name"] for r in names_dataset.rows] == ["Alice", "bob", "ALICEX"]


class TestFiltering:
    def test_case_insensitive_substring(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_filter_text("Name", "alic")
        view = engine.get_visible_rows()
        assert _names(view) == ["Alice", "ALICEX"]
        assert view.filtered_count == 2
        assert view.total_count == 3
        assert view.has_active_filters

    def test_clearing_restores_all_rows(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_filter_text("Name", "alic")
        engine.set_filter_text("Name", "")
        view = engine.get_visible_rows()
        assert _names(view) == ["Alice", "bob", "ALICEX"]
        assert not view.has_active_filters

    def test_whitespace_query_is_no_filter(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_filter_text("Name", "  ")
        assert engine.get_visible_rows().filtered_count == 3

    def test_filters_combine_with_and(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_filter_text("Name", "ali")
        engine.set_filter_text("City", "BERLIN")
        assert _names(engine.get_visible_rows()) == ["Alice", "ALICEX"]
        engine.set_filter_text("City", "hamb")
        assert _names(engine.get_visible_rows()) == []

    def test_filter_resets_page(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_page(3)
        engine.set_filter_text("Label", "row")
        assert engine.state.page == 1

    def test_clear_filters(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_filter_text("Name", "bob")
        engine.set_date_filter(date(2024, 2, 3))
        engine.clear_filters()
        view = engine.get_visible_rows()
        assert view.filtered_count == 3
        assert not view.has_active_filters


class TestDateFilter:
    def test_exact_date_match(self, documents_text):
        engine = TableEngine(parse(documents_text, ";"))
        engine.set_date_filter(date(2024, 2, 3))
        view = engine.get_visible_rows()
        assert [r["Dokument: ID"] for r in view.rows] == ["1001", "1003"]

    def test_date_and_text_filters(self, documents_text):
        engine = TableEngine(parse(documents_text, ";"))
        engine.set_date_filter(date(2024, 2, 3))
        engine.set_filter_text("Dokument: Typ", "korrigiert")
        assert [r["Dokument: ID"] for r in engine.get_visible_rows().rows] == ["1003"]

    def test_clear_date_filter(self, documents_text):
        engine = TableEngine(parse(documents_text, ";"))
        engine.set_date_filter(date(2024, 2, 3))
        engine.set_date_filter(None)
        assert engine.get_visible_rows().filtered_count == 4

    def test_missing_date_column_matches_nothing(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_date_filter(date(2024, 2, 3))
        assert engine.get_visible_rows().filtered_count == 0

    def test_configured_date_column(self):
        dataset = Dataset(
            headers=["When", "What"],
            rows=[
                {"When": "2024-01-05", "What": "a"},
                {"When": "2024-01-06", "What": "b"},
            ],
        )
        settings = Settings(date_column="When", date_format="%Y-%m-%d")
        engine = TableEngine(dataset, settings=settings)
        engine.set_date_filter(date(2024, 1, 6))
        assert engine.get_visible_rows().rows == [{"When": "2024-01-06", "What": "b"}]

    def test_default_month(self, documents_text):
        engine = TableEngine(parse(documents_text, ";"))
        assert engine.default_month() == date(2024, 2, 3)


class TestSorting:
    def test_next_sort_cycle(self):
        sort = next_sort(SortState(), "A")
        assert sort == SortState(column="A", direction=SortDirection.ASC)
        sort = next_sort(sort, "A")
        assert sort.direction == SortDirection.DESC
        assert next_sort(sort, "A") == SortState()

    def test_other_column_starts_ascending(self):
        sort = SortState(column="A", direction=SortDirection.DESC)
        assert next_sort(sort, "B") == SortState(column="B", direction=SortDirection.ASC)

    def test_three_clicks(self, names_dataset):
        engine = TableEngine(names_dataset)

        engine.set_sort("Name")
        assert _names(engine.get_visible_rows()) == ["Alice", "ALICEX", "bob"]

        engine.set_sort("Name")
        assert _names(engine.get_visible_rows()) == ["bob", "ALICEX", "Alice"]

        engine.set_sort("Name")
        assert _names(engine.get_visible_rows()) == ["Alice", "bob", "ALICEX"]
        assert not engine.state.sort.is_sorted

    def test_ties_keep_original_order(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_sort("City")
        assert _names(engine.get_visible_rows()) == ["Alice", "ALICEX", "bob"]
        engine.set_sort("City")
        assert _names(engine.get_visible_rows()) == ["bob", "Alice", "ALICEX"]

    def test_empty_values_sort_first(self):
        dataset = parse("K;V\nb;1\n;2\na;3", ";")
        engine = TableEngine(dataset)
        engine.set_sort("K")
        assert [r["V"] for r in engine.get_visible_rows().rows] == ["2", "3", "1"]

    def test_sort_resets_page(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_page(2)
        engine.set_sort("N")
        assert engine.state.page == 1


class TestColumnVisibility:
    def test_hide_column(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_column_visible("City", False)
        view = engine.get_visible_rows()
        assert view.headers == ["Name"]
        assert view.rows[0] == {"Name": "Alice"}
        assert names_dataset.rows[0] == {"Name": "Alice", "City": "Berlin"}

    def test_headers_keep_dataset_order(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_column_visible("Name", False)
        engine.set_column_visible("Name", True)
        assert engine.visible_headers() == ["Name", "City"]

    def test_hidden_column_still_filters(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.set_column_visible("City", False)
        engine.set_filter_text("City", "hamburg")
        assert engine.get_visible_rows().rows == [{"Name": "bob"}]

    def test_visibility_keeps_page(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_page(2)
        engine.set_column_visible("Label", False)
        assert engine.state.page == 2

    def test_toggle_all(self, names_dataset):
        engine = TableEngine(names_dataset)
        engine.toggle_all()
        assert engine.visible_headers() == []
        engine.toggle_all()
        assert engine.visible_headers() == ["Name", "City"]
        engine.set_column_visible("City", False)
        engine.toggle_all()
        assert engine.visible_headers() == ["Name", "City"]

    def test_display_columns_setting(self, documents_text):
        settings = Settings(display_columns=["Dokument: ID", "Dokument: Typ", "Missing"])
        engine = TableEngine(parse(documents_text, ";"), settings=settings)
        assert engine.visible_headers() == ["Dokument: ID", "Dokument: Typ"]


class TestPagination:
    def test_three_pages(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        view = engine.get_visible_rows()
        assert view.page_size == 20
        assert view.total_pages == 3
        assert len(view.rows) == 20

    def test_last_page(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_page(3)
        view = engine.get_visible_rows()
        assert [r["N"] for r in view.rows] == ["41", "42", "43", "44", "45"]
        assert (view.start_index, view.end_index) == (41, 45)

    def test_page_clamped(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        assert engine.set_page(4).page == 3
        assert engine.set_page(0).page == 1
        assert engine.set_page(-5).page == 1

    def test_next_and_previous(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        assert engine.previous_page().page == 1
        assert engine.next_page().page == 2
        assert engine.next_page().page == 3
        assert engine.next_page().page == 3
        assert engine.previous_page().page == 2

    def test_page_size(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_page(2)
        engine.set_page_size(10)
        view = engine.get_visible_rows()
        assert view.page == 1
        assert view.total_pages == 5

    def test_invalid_page_size(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        with pytest.raises(InvalidPageSizeError):
            engine.set_page_size(15)
        assert engine.state.page_size == 20

    def test_empty_result_has_one_page(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_filter_text("Label", "nothing matches")
        view = engine.get_visible_rows()
        assert view.total_pages == 1
        assert view.page == 1
        assert view.rows == []
        assert (view.start_index, view.end_index) == (0, 0)

    def test_out_of_range_page_is_clamped_in_view(self, numbered_dataset):
        state = initial_state(numbered_dataset)
        state = state.model_copy(update={"page": 9})
        view = get_visible_rows(state)
        assert view.page == 3
        assert len(view.rows) == 5

    def test_set_page_clamps_against_filtered_rows(self, numbered_dataset):
        state = reduce(initial_state(numbered_dataset), SetFilterText(column="N", text="1"))
        # 01, 10-19, 21, 31, 41
        state = reduce(state, SetPage(page=3))
        assert state.page == 1

    def test_summary(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_filter_text("N", "44")
        view = engine.get_visible_rows()
        assert view.summary() == "Showing 1 to 1 of 1 (filtered from 45) rows, 2 columns"


class TestVisibleRows:
    def test_idempotent(self, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_sort("Label")
        engine.set_page(2)
        first = engine.get_visible_rows()
        second = engine.get_visible_rows()
        assert first == second

    def test_load_resets_state(self, names_dataset, numbered_dataset):
        engine = TableEngine(numbered_dataset)
        engine.set_page(3)
        engine.set_sort("N")
        engine.set_filter_text("Label", "row")
        engine.load(names_dataset)
        view = engine.get_visible_rows()
        assert view.page == 1
        assert not view.sort.is_sorted
        assert not view.has_active_filters
        assert view.headers == ["Name", "City"]


class TestExportVisible:
    def test_exports_all_filtered_rows(self, numbered_dataset, tmp_path):
        engine = TableEngine(numbered_dataset)
        engine.set_filter_text("N", "1")
        engine.set_sort("N")
        engine.set_sort("N")
        engine.set_column_visible("Label", False)
        out = tmp_path / "out" / "filtered.csv"

        written = export_visible(engine.state, str(out))

        assert written == 14
        lines = out.read_text().splitlines()
        assert lines[0] == "N"
        assert lines[1] == "41"
        assert len(lines) == 15

    def test_export_round_trips_through_parser(self, documents_text, tmp_path):
        engine = TableEngine(parse(documents_text, ";"))
        out = tmp_path / "all.csv"
        export_visible(engine.state, str(out))
        dataset = parse(out.read_text(), ";")
        assert dataset.rows == engine.dataset.rows

    def test_export_with_all_columns_hidden(self, names_dataset, tmp_path):
        engine = TableEngine(names_dataset)
        engine.toggle_all()
        out = tmp_path / "empty.csv"

        with pytest.raises(NoVisibleColumnsError):
            export_visible(engine.state, str(out))
        assert not out.exists()
