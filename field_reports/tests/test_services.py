# field_reports/tests/test_services.py
import datetime as dt

import pytest

from field_reports.services import (
    effective_timestamp,
    format_display_date,
    highlight_aliases,
    month_window,
    newest_first,
    reconcile,
)


def rec(id_, sent_at=None, created_at=None, **extra):
    return dict(id=id_, sent_at=sent_at, created_at=created_at, **extra)


def ids(rows):
    return [r["id"] for r in rows]


def test_scenario_orders_primary_and_fallback_by_effective_time():
    timestamped = [
        rec("1", sent_at="2024-03-05T10:00:00Z", created_at="2024-03-05T10:00:01Z"),
        rec("2", sent_at="2024-03-02T09:00:00Z", created_at="2024-03-02T09:00:01Z"),
    ]
    untimestamped = [rec("3", created_at="2024-03-10T00:00:00Z")]
    assert ids(reconcile(timestamped, untimestamped)) == ["2", "1", "3"]


def test_empty_inputs_give_empty_list():
    assert reconcile([], []) == []


def test_single_set_is_sorted():
    a = [rec("b", sent_at="2024-03-09T00:00:00Z"), rec("a", sent_at="2024-03-01T00:00:00Z")]
    assert ids(reconcile(a, [])) == ["a", "b"]
    assert ids(reconcile([], a)) == ["a", "b"]


def test_one_record_per_distinct_id():
    a = [rec("1", sent_at="2024-03-01T00:00:00Z"), rec("2", sent_at="2024-03-02T00:00:00Z")]
    b = [rec("2", created_at="2024-03-03T00:00:00Z"), rec("3", created_at="2024-03-04T00:00:00Z")]
    out = reconcile(a, b)
    assert sorted(ids(out)) == ["1", "2", "3"]


def test_collision_keeps_untimestamped_copy():
    a = [rec("x", sent_at="2024-03-01T00:00:00Z", text="from primary")]
    b = [rec("x", created_at="2024-03-20T00:00:00Z", text="from fallback")]
    out = reconcile(a, b)
    assert len(out) == 1
    assert out[0] is b[0]


def test_duplicate_id_5_equals_untimestamped_version():
    a = [rec("5", sent_at="2024-03-07T00:00:00Z", caption="A")]
    b = [rec("5", created_at="2024-03-08T00:00:00Z", caption="B")]
    out = reconcile(a, b)
    assert out == [b[0]]


def test_missing_and_malformed_timestamps_sort_last():
    rows = [
        rec("m1", sent_at="not a date", created_at=None),
        rec("ok2", sent_at="2024-03-09T00:00:00Z"),
        rec("m0"),
        rec("ok1", created_at="2024-03-01T00:00:00Z"),
        rec("m2", sent_at="2024-13-45T00:00:00Z", created_at="garbage"),
    ]
    out = ids(reconcile(rows, []))
    assert out[:2] == ["ok1", "ok2"]
    assert set(out[2:]) == {"m0", "m1", "m2"}


def test_unparseable_primary_falls_back_to_created_at():
    row = rec("1", sent_at="yesterday", created_at="2024-03-04T05:06:07Z")
    assert effective_timestamp(row) == dt.datetime(2024, 3, 4, 5, 6, 7, tzinfo=dt.timezone.utc)


def test_equal_timestamps_are_ordered_by_id_and_deterministic():
    ts = "2024-03-05T10:00:00Z"
    a = [rec("c", sent_at=ts), rec("a", sent_at=ts)]
    b = [rec("b", created_at=ts)]
    first = ids(reconcile(a, b))
    assert first == ["a", "b", "c"]
    assert ids(reconcile(a, b)) == first


def test_output_is_non_decreasing():
    a = [rec(str(i), sent_at=f"2024-03-{d:02d}T00:00:00Z") for i, d in enumerate([14, 3, 27, 9])]
    b = [rec(f"f{i}", created_at=f"2024-03-{d:02d}T12:00:00Z") for i, d in enumerate([1, 20, 9])]
    out = reconcile(a, b)
    stamps = [effective_timestamp(r) for r in out]
    assert stamps == sorted(stamps)


def test_naive_and_offset_timestamps_compare_in_utc():
    a = [
        rec("ist", sent_at="2024-03-05T10:00:00+05:30"),   # 04:30 UTC
        rec("naive", sent_at=dt.datetime(2024, 3, 5, 5, 0)),  # assumed UTC
    ]
    assert ids(reconcile(a, [])) == ["ist", "naive"]


def test_inputs_are_not_mutated():
    a = [rec("2", sent_at="2024-03-02T00:00:00Z"), rec("1", sent_at="2024-03-01T00:00:00Z")]
    snapshot = list(a)
    reconcile(a, [])
    assert a == snapshot


def test_custom_field_names():
    rows = [
        {"pk": 1, "noted_at": None, "created_at": "2024-01-02T00:00:00Z"},
        {"pk": 2, "noted_at": "2024-01-01T00:00:00Z", "created_at": "2024-01-05T00:00:00Z"},
    ]
    out = reconcile(rows, [], primary="noted_at", key="pk")
    assert [r["pk"] for r in out] == [2, 1]


def test_month_window_is_half_open_and_rolls_over_year():
    start, end = month_window(2024, 12)
    assert start == dt.datetime(2024, 12, 1, tzinfo=dt.timezone.utc)
    assert end == dt.datetime(2025, 1, 1, tzinfo=dt.timezone.utc)


def test_month_window_rejects_bad_month():
    with pytest.raises(ValueError):
        month_window(2024, 13)


def test_newest_first_puts_undated_last():
    rows = [
        rec("old", sent_at="2024-01-01T00:00:00Z"),
        rec("none"),
        rec("new", created_at="2024-02-01T00:00:00Z"),
    ]
    assert ids(newest_first(rows, primary="sent_at")) == ["new", "old", "none"]


def test_format_display_date_uses_ordinal_and_timezone():
    # 20:00 UTC on the 1st is already the 2nd in Kolkata
    assert format_display_date("2024-03-01T20:00:00Z", "Asia/Kolkata") == "March 2nd 2024"
    assert format_display_date("2024-03-11T00:00:00Z", "UTC") == "March 11th 2024"
    assert format_display_date(None, "UTC") == "Date unavailable"


def test_highlight_marks_aliases_case_insensitively():
    segs = highlight_aliases("anu and Raju played with ANU", ["Anu", "Raju"])
    assert segs == [
        {"text": "anu", "highlight": True},
        {"text": " and ", "highlight": False},
        {"text": "Raju", "highlight": True},
        {"text": " played with ", "highlight": False},
        {"text": "ANU", "highlight": True},
    ]


def test_highlight_prefers_longer_alias_and_escapes_regex():
    segs = highlight_aliases("Anushka (R.K.) came", ["Anu", "Anushka", "R.K.", "  "])
    assert {"text": "Anushka", "highlight": True} in segs
    assert {"text": "R.K.", "highlight": True} in segs
    assert not any(s["text"] == "Anu" for s in segs)


def test_highlight_without_aliases_returns_plain_text():
    assert highlight_aliases("hello", []) == [{"text": "hello", "highlight": False}]
    assert highlight_aliases("", ["x"]) == []


def test_out_of_range_offsets_are_treated_as_missing():
    # parseable, but converting to UTC leaves the datetime range
    rows = [
        rec("low", sent_at="0001-01-01T00:00:00+05:00"),
        rec("ok", sent_at="2024-03-05T10:00:00Z"),
        rec("high", sent_at="9999-12-31T23:00:00-05:00"),
    ]
    out = ids(reconcile(rows, []))
    assert out[0] == "ok"
    assert set(out[1:]) == {"low", "high"}
    assert effective_timestamp(rows[0]) is None


def test_out_of_range_offset_falls_back_to_created_at():
    row = rec("a", sent_at="0001-01-01T00:00:00+05:00", created_at="2024-03-04T00:00:00Z")
    assert effective_timestamp(row) == dt.datetime(2024, 3, 4, tzinfo=dt.timezone.utc)


def test_format_display_date_out_of_range_is_unavailable():
    assert format_display_date("9999-12-31T23:00:00-05:00", "UTC") == "Date unavailable"
    # valid in UTC, but past datetime.max once shifted to +05:30
    assert format_display_date("9999-12-31T23:00:00Z", "Asia/Kolkata") == "Date unavailable"
