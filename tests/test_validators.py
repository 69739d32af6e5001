"""Tests for field validators and index parsing."""

import pytest

from deliverybook.errors import IndexFormatError, InvalidFormatError, InvalidIndexError
from deliverybook.index import Index
from deliverybook.models import DriverStatus, OrderStatus, Tag
from deliverybook.validators import (
    EMAIL_CONSTRAINTS,
    MESSAGE_INVALID_DRIVER_STATUS,
    MESSAGE_INVALID_INDEX,
    PHONE_CONSTRAINTS,
    parse_address,
    parse_dish_name,
    parse_driver_status,
    parse_email,
    parse_index,
    parse_name,
    parse_order_status,
    parse_phone,
    parse_price,
    parse_tags,
)


class TestParsePhone:
    @pytest.mark.parametrize("raw", ["911", "91234567", " 91234567 ", "\t124293842033123\n"])
    def test_valid_phone_round_trips_trimmed_value(self, raw):
        assert parse_phone(raw).value == raw.strip()

    @pytest.mark.parametrize("raw", ["", "  ", "91", "phone", "9011p041", "9312 1534", "+6591234567"])
    def test_invalid_phone(self, raw):
        with pytest.raises(InvalidFormatError) as exc_info:
            parse_phone(raw)
        assert str(exc_info.value) == PHONE_CONSTRAINTS


class TestParseName:
    @pytest.mark.parametrize("raw", ["Alex", "peter jack", "12345", "Capital Tan 2nd", " Alex "])
    def test_valid_name(self, raw):
        assert parse_name(raw).value == raw.strip()

    @pytest.mark.parametrize("raw", ["", " ", "^", "peter*", "Ali-baba"])
    def test_invalid_name(self, raw):
        with pytest.raises(InvalidFormatError):
            parse_name(raw)

    def test_dish_name_uses_its_own_message(self):
        with pytest.raises(InvalidFormatError, match="Dish names"):
            parse_dish_name("Fish & Chips")


class TestParseEmail:
    @pytest.mark.parametrize(
        "raw",
        [
            "a@x.com",
            "PeterJack_1190@example.com",
            "peter.jack+tag@very-very-long.example.com",
            "a1@example1.com",
            "test@localhost",
        ],
    )
    def test_valid_email(self, raw):
        assert parse_email(raw).value == raw

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "@example.com",
            "peterjack@",
            "peterjackexample.com",
            "a.@x.com",
            "-a@x.com",
            "a@-x.com",
            "a@x-.com",
            "a@x.c",
            "a@x",
            "peter jack@example.com",
        ],
    )
    def test_invalid_email(self, raw):
        with pytest.raises(InvalidFormatError) as exc_info:
            parse_email(raw)
        assert str(exc_info.value) == EMAIL_CONSTRAINTS


class TestParseAddressAndTags:
    def test_address_is_trimmed(self):
        assert parse_address("  Blk 1, #01-01 ").value == "Blk 1, #01-01"

    def test_blank_address(self):
        with pytest.raises(InvalidFormatError):
            parse_address("   ")

    def test_tags_are_deduplicated(self):
        assert parse_tags(["friends", " friends ", "vip"]) == frozenset({Tag("friends"), Tag("vip")})

    def test_invalid_tag(self):
        with pytest.raises(InvalidFormatError):
            parse_tags(["good", "not ok"])


class TestParsePrice:
    @pytest.mark.parametrize("raw", ["0", "4", "4.5", "4.50", "10000", " 12.00 "])
    def test_valid_price(self, raw):
        assert parse_price(raw).value == raw.strip()

    @pytest.mark.parametrize("raw", ["", "-1", "1.234", ".5", "5.", "abc", "10000.01", "1e3"])
    def test_invalid_price(self, raw):
        with pytest.raises(InvalidFormatError):
            parse_price(raw)


class TestParseStatus:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("AVAILABLE", DriverStatus.AVAILABLE),
            (" unavailable ", DriverStatus.UNAVAILABLE),
            ("Delivering", DriverStatus.DELIVERING),
        ],
    )
    def test_driver_status_is_case_insensitive(self, raw, expected):
        assert parse_driver_status(raw) is expected

    def test_unknown_driver_status(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            parse_driver_status("sleeping")
        assert str(exc_info.value) == MESSAGE_INVALID_DRIVER_STATUS

    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_every_order_status_parses(self, status):
        assert parse_order_status(status.name.lower()) is status

    def test_unknown_order_status(self):
        with pytest.raises(InvalidFormatError):
            parse_order_status("LOST")


class TestParseIndex:
    def test_valid_index(self):
        assert parse_index("1") == Index.from_one_based(1)
        assert parse_index("  3  ").zero_based == 2

    @pytest.mark.parametrize("raw", ["", "0", "-1", "+1", "abc", "1 2", "1.0"])
    def test_invalid_index(self, raw):
        with pytest.raises(IndexFormatError) as exc_info:
            parse_index(raw)
        assert str(exc_info.value) == MESSAGE_INVALID_INDEX
        assert isinstance(exc_info.value, InvalidFormatError)
        assert isinstance(exc_info.value, InvalidIndexError)
