import pytest

from actrend.flow import ColorCache
from actrend.records import Record
from actrend.trends import ParseResult, ingest


class SequenceColorProvider:
    """Hands out "c1", "c2", ... so tests can tell fresh colors from cached ones."""

    def __init__(self):
        self.calls = 0

    def next_color(self) -> str:
        self.calls += 1
        return f"c{self.calls}"


@pytest.fixture
def example_rows():
    return [
        {"trend_2011": "W", "trend_2016": "L", "trend_2021": "W", "zone": "North"},
        {"trend_2011": "W", "trend_2016": "L", "trend_2021": "W", "zone": "South"},
        {"trend_2011": "L", "trend_2016": "L", "trend_2021": "L", "zone": "North"},
    ]


@pytest.fixture
def example_dataset(example_rows):
    return ingest(ParseResult(data=example_rows), source_name="example.csv")


@pytest.fixture
def constituency_rows():
    return [
        {"ac_no": 1, "ac_name": "Gummidipoondi", "district_name": "Tiruvallur", "zone": "North",
         "trend_2011": "W", "trend_2016": "W", "trend_2021": "L", "margin": 1200},
        {"ac_no": 2, "ac_name": "Ponneri", "district_name": "Tiruvallur", "zone": "North",
         "trend_2011": "W", "trend_2016": "L", "trend_2021": "L", "margin": 300},
        {"ac_no": 3, "ac_name": "Tiruttani", "district_name": "Tiruvallur", "zone": "North",
         "trend_2011": "L", "trend_2016": None, "trend_2021": "W", "margin": 50},
        {"ac_no": 4, "ac_name": "Madurai East", "district_name": "Madurai", "zone": "South",
         "trend_2011": "W", "trend_2016": "W", "trend_2021": "L", "margin": 870},
        {"ac_no": 5, "ac_name": "Melur", "district_name": None, "zone": "",
         "trend_2011": "l", "trend_2016": "W", "trend_2021": "W", "margin": 10},
    ]


@pytest.fixture
def constituency_records(constituency_rows):
    years = ("2011", "2016", "2021")
    return [Record(r).with_pattern(years) for r in constituency_rows]


@pytest.fixture
def color_provider():
    return SequenceColorProvider()


@pytest.fixture
def color_cache(color_provider):
    return ColorCache(color_provider)
