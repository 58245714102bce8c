"""Unit tests for parameter wire formatting."""
import enum
from datetime import datetime, timedelta, timezone

import pytest

from wikiclient.client.params import format_value, to_wire_params


class Color(enum.Enum):
    RED = "red"


class TestFormatValue:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, None),
            (False, None),
            (True, "1"),
            (0, "0"),
            (10, "10"),
            ("Main Page", "Main Page"),
            (Color.RED, "red"),
            ([0, 14], "0|14"),
            (("page", "subcat"), "page|subcat"),
            ({"b", "a"}, "a|b"),
        ],
    )
    def test_values(self, value, expected):
        assert format_value(value) == expected

    def test_naive_datetime(self):
        assert format_value(datetime(2019, 9, 28, 7, 31, 7)) == "2019-09-28T07:31:07Z"

    def test_aware_datetime_converted_to_utc(self):
        value = datetime(2019, 9, 28, 9, 31, 7, tzinfo=timezone(timedelta(hours=2)))
        assert format_value(value) == "2019-09-28T07:31:07Z"


class TestToWireParams:
    def test_drops_omitted_and_adds_envelope(self):
        wire = to_wire_params({"action": "query", "list": "allpages", "apto": None, "apfilterredir": False})
        assert wire == {"action": "query", "list": "allpages", "format": "json", "formatversion": "2"}

    def test_explicit_formatversion_kept(self):
        wire = to_wire_params({"action": "query", "formatversion": 1})
        assert wire["formatversion"] == "1"
