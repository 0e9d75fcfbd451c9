from __future__ import annotations

import pytest

from order_browser.pagination.page_window import (
    EntryKind,
    PageState,
    compute_offset,
    compute_total_pages,
    compute_visible_window,
    parse_page,
)


def labels(entries):
    return ["gap" if e.is_gap else e.page for e in entries]


@pytest.mark.parametrize("page,expected", [(1, 0), (2, 100), (3, 200), (0, 0), (-4, 0)])
def test_compute_offset(page, expected):
    assert compute_offset(page, 100) == expected


@pytest.mark.parametrize(
    "total,expected",
    [(0, 0), (1, 1), (99, 1), (100, 1), (101, 2), (250, 3), (300, 3), (-5, 0)],
)
def test_compute_total_pages(total, expected):
    assert compute_total_pages(total, 100) == expected


def test_compute_total_pages_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        compute_total_pages(10, 0)


def test_window_in_the_middle_has_gaps_on_both_sides():
    assert labels(compute_visible_window(5, 10, radius=2)) == [1, "gap", 3, 4, 5, 6, 7, "gap", 10]


def test_window_fully_covered():
    assert labels(compute_visible_window(1, 3, radius=2)) == [1, 2, 3]


def test_window_start_at_two_has_no_leading_gap():
    assert labels(compute_visible_window(4, 10)) == [1, 2, 3, 4, 5, 6, "gap", 10]


def test_window_end_next_to_last_page_has_no_trailing_gap():
    assert labels(compute_visible_window(7, 10)) == [1, "gap", 5, 6, 7, 8, 9, 10]


def test_window_near_start():
    assert labels(compute_visible_window(3, 10)) == [1, 2, 3, 4, 5, "gap", 10]


def test_window_zero_radius():
    assert labels(compute_visible_window(5, 10, radius=0)) == [1, "gap", 5, "gap", 10]


def test_window_empty_without_pages():
    assert compute_visible_window(1, 0) == []


def test_window_marks_current_page_only():
    entries = compute_visible_window(5, 10)
    current = [e.page for e in entries if e.current]
    assert current == [5]
    assert all(e.kind is EntryKind.GAP for e in entries if e.page is None)


def test_window_for_page_past_the_end_stays_in_range():
    entries = compute_visible_window(20, 3)
    assert labels(entries) == [1, 2, 3]
    assert not any(e.current for e in entries)


def test_window_never_repeats_pages():
    for radius in range(4):
        for total in range(13):
            for current in range(1, 14):
                pages = [e.page for e in compute_visible_window(current, total, radius) if not e.is_gap]
                assert pages == sorted(set(pages))
                assert all(1 <= p <= total for p in pages)
                if total:
                    assert pages[0] == 1 and pages[-1] == total


@pytest.mark.parametrize("value,expected", [("3", 3), (" 2 ", 2), ("0", 1), ("-1", 1), ("abc", 1), (None, 1), (7, 7)])
def test_parse_page(value, expected):
    assert parse_page(value) == expected


def test_page_state_derives_offset_and_total_pages():
    state = PageState(current_page=3, status_filter="open", total_results=250)
    assert state.offset == 200
    assert state.total_pages == 3
    assert state.with_total(1000).total_pages == 10
    assert state.with_page(4).offset == 300


def test_page_state_clamps_invalid_input():
    state = PageState(current_page=0, status_filter="", total_results=-3)
    assert state.current_page == 1
    assert state.status_filter == "all"
    assert state.total_results == 0
    assert state.offset == 0


def test_page_state_transitions_return_new_states():
    state = PageState(current_page=4, status_filter="open", total_results=900)
    moved = state.with_status("filled")
    assert moved.current_page == 1
    assert moved.status_filter == "filled"
    assert state.current_page == 4
    assert state.status_filter == "open"


def test_page_state_from_query():
    state = PageState.from_query({"page": "2", "status": "expired"})
    assert (state.current_page, state.status_filter, state.offset) == (2, "expired", 100)
    assert PageState.from_query({}) == PageState()
    assert PageState.from_query({"page": "x"}).current_page == 1


def test_page_state_window():
    state = PageState(current_page=5, total_results=1000)
    assert labels(state.window()) == [1, "gap", 3, 4, 5, 6, 7, "gap", 10]
