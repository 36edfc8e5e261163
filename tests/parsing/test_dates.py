"""
Unit tests for OFX date parsing.
"""
from datetime import datetime, timedelta, timezone

import pytest

from ofx_reader.parsing.config import ParserSettings
from ofx_reader.parsing.dates import parse_ofx_date, parse_offset
from ofx_reader.parsing.exceptions import InvalidDateError


def tz(hours):
    return timezone(timedelta(hours=hours))


class TestParseOfxDate:
    def test_fraction_and_offset(self):
        parsed = parse_ofx_date("20230115120000.500[-5:EST]")

        assert parsed == datetime(2023, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(hours=-5)
        assert (parsed.hour, parsed.minute, parsed.second, parsed.microsecond) == (7, 0, 0, 0)

    def test_positive_single_digit_offset_is_padded(self):
        parsed = parse_ofx_date("20230601080000[+2:CEST]")
        assert parsed.utcoffset() == timedelta(hours=2)
        assert parsed.hour == 10

    def test_two_digit_offset_without_name(self):
        parsed = parse_ofx_date("20230601080000[-03]")
        assert parsed.tzinfo == tz(-3)
        assert parsed == datetime(2023, 6, 1, 8, tzinfo=timezone.utc)

    def test_unsigned_offset(self):
        parsed = parse_ofx_date("20230601080000[0:GMT]")
        assert parsed.utcoffset() == timedelta(0)

    def test_date_only_is_utc_midnight(self):
        assert parse_ofx_date("20230110") == datetime(2023, 1, 10, tzinfo=timezone.utc)

    def test_without_seconds(self):
        assert parse_ofx_date("202301101530") == datetime(2023, 1, 10, 15, 30, tzinfo=timezone.utc)

    def test_result_is_always_aware(self):
        assert parse_ofx_date("20230110120000").tzinfo is not None

    def test_surrounding_whitespace(self):
        assert parse_ofx_date(" 20230110 ") == datetime(2023, 1, 10, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", ["", "2023", "20231301", "20230230", "not a date", "20230115[GMT]", "20230115[+25:XYZ]"])
    def test_invalid_dates(self, raw):
        with pytest.raises(InvalidDateError) as exc:
            parse_ofx_date(raw, field="STMTTRN/DTPOSTED")
        assert exc.value.raw == raw
        assert exc.value.field == "STMTTRN/DTPOSTED"
        assert "STMTTRN/DTPOSTED" in str(exc.value)

    def test_custom_formats(self):
        settings = ParserSettings(date_formats=('%d/%m/%Y',))
        assert parse_ofx_date("10/01/2023", settings=settings) == datetime(2023, 1, 10, tzinfo=timezone.utc)


class TestParseOffset:
    def test_no_annotation(self):
        assert parse_offset("20230110") is None

    def test_negative(self):
        assert parse_offset("20230110[-3:BRT]") == tz(-3)
