from actrend.data import frame_to_rows, parse_csv, upload_token
from actrend.errors import IngestionError
from actrend.trends import ingest

import pandas as pd
import pytest

CSV = (
    "ac_no,ac_name,district_name,zone,trend_2011,trend_2016,trend_2021\n"
    "1, Gummidipoondi ,Tiruvallur,North,W,L,W\n"
    "\n"
    "2,Ponneri,Tiruvallur,North,L,,L\n"
)


def test_parse_csv_rows_and_types():
    result = parse_csv(CSV.encode("utf-8"), "trends.csv")
    assert result.errors == []
    assert len(result.data) == 2
    first, second = result.data
    assert first["ac_no"] == 1 and isinstance(first["ac_no"], int)
    assert first["ac_name"] == "Gummidipoondi"
    assert second["trend_2016"] is None


def test_parse_and_ingest():
    ds = ingest(parse_csv(CSV.encode("utf-8"), "trends.csv"))
    assert ds.years == ("2011", "2016", "2021")
    assert [r.trend_pattern for r in ds.records] == ["W L W", "L  L"]


def test_parse_csv_with_bom_and_cp1252():
    bom = ("\ufeff" + CSV).encode("utf-8")
    assert list(parse_csv(bom, "a.csv").data[0])[0] == "ac_no"

    latin = "ac_name,trend_2016,trend_2021\nTiruchirappalli Café,W,L\n".encode("cp1252")
    assert parse_csv(latin, "b.csv").data[0]["ac_name"] == "Tiruchirappalli Café"


def test_parse_csv_rejects_non_csv_name():
    result = parse_csv(b"a,b\n1,2\n", "report.xlsx")
    assert result.data == []
    assert result.errors[0].message == "Please select a valid CSV file."


def test_parse_csv_empty_file():
    result = parse_csv(b"", "empty.csv")
    assert result.data == [] and result.errors == []
    with pytest.raises(IngestionError, match="No data found"):
        ingest(result)


def test_parse_csv_header_only():
    assert parse_csv(b"trend_2011,trend_2016\n", "h.csv").data == []


def test_parse_csv_tokenizer_error_reports_row():
    text = b"trend_2011,trend_2016\nW,L\nL,W\nW,L,W,L\n"
    result = parse_csv(text, "bad.csv")
    assert result.data == []
    assert len(result.errors) == 1
    assert result.errors[0].row == 2
    with pytest.raises(IngestionError, match="CSV parsing error\\(s\\): Row 3: Parsing error"):
        ingest(result)


def test_frame_to_rows_numeric_columns():
    df = pd.DataFrame({"a": ["1", "2.5", ""], "b": ["x", "7", " y "]})
    rows = frame_to_rows(df)
    assert rows[0] == {"a": 1.0, "b": "x"}
    assert rows[1] == {"a": 2.5, "b": "7"}
    assert rows[2] == {"a": None, "b": "y"}


def test_infinite_values_keep_column_as_text():
    result = parse_csv(b"ac_no,margin,trend_2011,trend_2016\n1,inf,W,L\n2,5,L,L\n3,1e999,W,W\n", "x.csv")
    assert result.errors == []
    assert [r["margin"] for r in result.data] == ["inf", "5", "1e999"]
    assert [r["ac_no"] for r in result.data] == [1, 2, 3]


def test_short_rows_are_reported():
    text = b"ac_no,trend_2011,trend_2016\n1,W,L\n2,W\n3,L,\n4\n"
    result = parse_csv(text, "x.csv")
    assert [(e.row, e.message) for e in result.errors] == [
        (1, "Too few fields: expected 3 fields but parsed 2"),
        (3, "Too few fields: expected 3 fields but parsed 1"),
    ]
    with pytest.raises(IngestionError) as exc:
        ingest(result)
    assert str(exc.value) == (
        "CSV parsing error(s): Row 2: Too few fields: expected 3 fields but parsed 2; "
        "Row 4: Too few fields: expected 3 fields but parsed 1"
    )


def test_upload_token_tracks_content():
    assert upload_token(b"trend_2011\nW\n") == upload_token(b"trend_2011\nW\n")
    assert upload_token(b"trend_2011\nW\n") != upload_token(b"trend_2011\nL\n")
