from datetime import date, datetime

import pytest

from date_keys import (
    MalformedKeyError,
    date_key,
    decode_date_key,
    encode_date_key,
    key_sort_tuple,
)


def test_encode_has_no_zero_padding() -> None:
    assert encode_date_key(date(2024, 3, 5)) == "2024-3-5"
    assert date_key(2024, 12, 31) == "2024-12-31"


def test_encode_drops_time_of_day() -> None:
    assert encode_date_key(datetime(2024, 3, 15, 23, 59)) == "2024-3-15"


def test_decode_returns_plain_date() -> None:
    d = decode_date_key("2024-3-15")
    assert d == date(2024, 3, 15)
    assert type(d) is date


@pytest.mark.parametrize("d", [
    date(2024, 2, 29),
    date(2023, 12, 31),
    date(1, 1, 1),
    date(9999, 12, 31),
])
def test_decode_inverts_encode(d: date) -> None:
    assert decode_date_key(encode_date_key(d)) == d


def test_canonical_key_survives_roundtrip() -> None:
    assert encode_date_key(decode_date_key("2024-11-3")) == "2024-11-3"


@pytest.mark.parametrize("key", ["", "2024-03", "2024/3/15", "abc", "2024-3-15x", "2023-2-29", "2024-13-1"])
def test_malformed_keys_are_rejected(key: str) -> None:
    with pytest.raises(MalformedKeyError):
        decode_date_key(key)


def test_malformed_key_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        decode_date_key("not-a-key")


def test_key_order_matches_date_order() -> None:
    days = [date(2024, 10, 2), date(2024, 9, 30), date(2023, 12, 31), date(2024, 10, 11)]
    by_key = sorted(days, key=lambda d: key_sort_tuple(encode_date_key(d)))
    assert by_key == sorted(days)
