import pytest

from actrend.grouping import find_group
from actrend.summary import (
    ac_frame,
    district_summary,
    next_sort_state,
    sort_ac_table,
    sort_district_table,
    sort_rows,
    sort_zone_table,
    summarize_by,
    summary_frame,
    zone_summary,
)


def test_summarize_by_zone_on_example_group(example_dataset):
    group = find_group(example_dataset.groups, 2)
    rows = summarize_by(group.records, "zone")
    assert sorted(rows, key=lambda r: r["category"]) == [
        {"category": "North", "count": 1},
        {"category": "South", "count": 1},
    ]
    assert sort_rows(rows, "category", "asc") == [
        {"category": "North", "count": 1},
        {"category": "South", "count": 1},
    ]


def test_summaries_default_to_unknown(constituency_records):
    districts = {r["district"]: r["count"] for r in district_summary(constituency_records)}
    zones = {r["zone"]: r["count"] for r in zone_summary(constituency_records)}
    assert districts == {"Tiruvallur": 3, "Madurai": 1, "Unknown": 1}
    assert zones == {"North": 3, "South": 1, "Unknown": 1}


def test_summarize_by_plain_dicts_and_empty():
    assert summarize_by([{"zone": "West"}, {"zone": None}], "zone") == [
        {"category": "West", "count": 1},
        {"category": "Unknown", "count": 1},
    ]
    assert summarize_by([], "zone") == []


def test_numeric_sort_desc_then_asc():
    rows = [{"d": "A", "count": 3}, {"d": "B", "count": 10}, {"d": "C", "count": 1}]
    desc = sort_rows(rows, "count", "desc")
    assert [r["count"] for r in desc] == [10, 3, 1]
    asc = sort_rows(desc, "count", "asc")
    assert asc[0]["count"] == min(r["count"] for r in rows)
    assert [r["count"] for r in asc] == [1, 3, 10]


def test_numeric_sort_is_not_lexicographic():
    rows = [{"n": 9}, {"n": 10}, {"n": 100}]
    assert [r["n"] for r in sort_rows(rows, "n", "asc")] == [9, 10, 100]


def test_string_sort_is_case_insensitive():
    rows = [{"name": "madurai"}, {"name": "Chennai"}, {"name": "ariyalur"}, {"name": None}]
    assert [r["name"] for r in sort_rows(rows, "name", "asc")] == [None, "ariyalur", "Chennai", "madurai"]
    assert [r["name"] for r in sort_rows(rows, "name", "desc")] == ["madurai", "Chennai", "ariyalur", None]


def test_sort_type_sampled_from_first_non_null():
    rows = [{"v": None}, {"v": 5}, {"v": "x"}, {"v": 2}]
    # "x" has no numeric value and falls back to 0
    assert [r["v"] for r in sort_rows(rows, "v", "asc")] == [None, "x", 2, 5]


def test_sort_is_stable_for_equal_keys():
    rows = [{"id": i, "count": c} for i, c in enumerate([2, 1, 2, 1, 2])]
    assert [r["id"] for r in sort_rows(rows, "count", "asc")] == [1, 3, 0, 2, 4]
    assert [r["id"] for r in sort_rows(rows, "count", "desc")] == [0, 2, 4, 1, 3]


def test_index_sort_restores_original_order():
    rows = [{"count": 2}, {"count": 1}]
    out = sort_rows(rows, "index", "desc")
    assert out == rows
    assert out is not rows


def test_sort_rejects_bad_direction():
    with pytest.raises(ValueError):
        sort_rows([{"count": 1}], "count", "down")


def test_sort_empty():
    assert sort_rows([], "count", "asc") == []


def test_table_sorters(constituency_records):
    districts = district_summary(constituency_records)
    by_count = sort_district_table(districts, "count", "desc")
    assert by_count[0] == {"district": "Tiruvallur", "count": 3}
    by_name = sort_district_table(districts, "district", "asc")
    assert [r["district"] for r in by_name] == ["Madurai", "Tiruvallur", "Unknown"]
    assert sort_district_table(districts, "index", "asc") == districts
    assert sort_district_table(districts, "bogus", "asc") == districts

    zones = sort_zone_table(zone_summary(constituency_records), "zone", "desc")
    assert [r["zone"] for r in zones] == ["Unknown", "South", "North"]

    acs = sort_ac_table(constituency_records, "ac", "asc")
    assert [r.ac_name for r in acs] == ["Gummidipoondi", "Madurai East", "Melur", "Ponneri", "Tiruttani"]
    acs = sort_ac_table(constituency_records, "district", "asc")
    assert [r.ac_no for r in acs] == [5, 4, 1, 2, 3]


def test_next_sort_state():
    assert next_sort_state({"column": "count", "direction": "desc"}, "count") == {"column": "count", "direction": "asc"}
    assert next_sort_state({"column": "count", "direction": "asc"}, "count") == {"column": "count", "direction": "desc"}
    assert next_sort_state({"column": "count", "direction": "asc"}, "district") == {"column": "district", "direction": "desc"}
    assert next_sort_state(None, "zone") == {"column": "zone", "direction": "desc"}


def test_display_frames(constituency_records):
    frame = summary_frame([{"zone": "North", "count": 3}, {"zone": None, "count": 1}], "zone", "Zone")
    assert list(frame.columns) == ["S.No", "Zone", "AC Count"]
    assert frame["Zone"].tolist() == ["North", "Unknown"]
    assert frame["S.No"].tolist() == [1, 2]

    acs = ac_frame(constituency_records[:2])
    assert acs["AC Name"].tolist() == ["Gummidipoondi (1)", "Ponneri (2)"]
    assert acs["District"].tolist() == ["Tiruvallur", "Tiruvallur"]
