"""Tests for rendering helpers."""

from rich.text import Text

from deliverybook.models import Dish, DriverStatus, Name, OrderStatus, Price
from deliverybook.rendering import (
    format_driver,
    format_entity_list,
    format_order,
    status_badge_style,
)


def test_empty_list_placeholder():
    assert format_entity_list([], empty="(no orders yet)") == "(no orders yet)"


def test_numbered_rows(typical_store):
    rendered = format_entity_list(typical_store.orders())
    assert isinstance(rendered, Text)
    assert "1. #1" in rendered.plain
    assert "2. #2" in rendered.plain


def test_long_list_shows_every_row():
    dishes = [Dish(Name(f"Dish{n}"), Price("1")) for n in range(40)]
    plain = format_entity_list(dishes).plain
    assert plain.splitlines()[-1] == "40. Dish39  $1.00"
    assert len(plain.splitlines()) == 40


def test_order_card(typical_store):
    plain = format_order(typical_store.orders()[1]).plain
    assert "#2" in plain
    assert "DELIVERING" in plain
    assert "Bernice Yu (99272758)" in plain
    assert "Driver: Mei Lin" in plain
    assert "Chicken Rice, Laksa" in plain
    assert "$10.50" in plain


def test_driver_row(mei):
    assert format_driver(mei).plain == " DELIVERING  Mei Lin  87654321"


def test_every_status_has_a_style():
    for status in (*DriverStatus, *OrderStatus):
        assert status_badge_style(status) != "bold"
