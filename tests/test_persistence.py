"""Tests for SQLite persistence."""

import sqlite3
from pathlib import Path

import pytest

from deliverybook.errors import StorageError
from deliverybook.models import EntityKind
from deliverybook.persistence import load_state, save_state
from deliverybook.store import ModelStore


class TestSaveAndLoad:
    def test_missing_file_gives_empty_store(self, db_path: Path):
        store = load_state(db_path)
        assert store.size() == 0
        assert not db_path.exists()

    def test_save_then_load(self, typical_store: ModelStore, db_path: Path):
        save_state(typical_store, db_path)

        loaded = load_state(db_path)

        assert loaded == typical_store
        assert loaded.all(EntityKind.ORDER)[1].customer.tags == typical_store.all(EntityKind.ORDER)[1].customer.tags

    def test_save_overwrites_previous_state(self, typical_store: ModelStore, db_path: Path):
        save_state(typical_store, db_path)
        typical_store.remove(typical_store.all(EntityKind.DISH)[0])

        save_state(typical_store, db_path)

        assert load_state(db_path).size(EntityKind.DISH) == 1

    def test_filters_are_not_persisted(self, typical_store: ModelStore, db_path: Path):
        typical_store.update_filter(EntityKind.CUSTOMER, lambda customer: False)
        save_state(typical_store, db_path)

        assert len(load_state(db_path).customers()) == 2


class TestCorruptData:
    def test_invalid_row(self, typical_store: ModelStore, db_path: Path):
        save_state(typical_store, db_path)
        conn = sqlite3.connect(db_path)
        with conn:
            conn.execute("UPDATE customers SET phone = 'not a phone' WHERE position = 0")
        conn.close()

        with pytest.raises(StorageError, match="invalid record"):
            load_state(db_path)

    def test_duplicate_rows(self, typical_store: ModelStore, db_path: Path):
        save_state(typical_store, db_path)
        conn = sqlite3.connect(db_path)
        with conn:
            conn.execute(
                "INSERT INTO dishes (position, name, price) SELECT 99, name, price FROM dishes WHERE position = 0"
            )
        conn.close()

        with pytest.raises(StorageError, match="duplicate"):
            load_state(db_path)

    def test_not_a_database(self, db_path: Path):
        db_path.parent.mkdir(parents=True)
        db_path.write_text("this is not sqlite\n" * 64)

        with pytest.raises(StorageError):
            load_state(db_path)


def test_older_file_without_customer_tags_column(db_path: Path):
    db_path.parent.mkdir(parents=True)
    conn = sqlite3.connect(db_path)
    with conn:
        conn.execute(
            """
            CREATE TABLE orders (
                position INTEGER PRIMARY KEY,
                order_number INTEGER NOT NULL,
                customer_name TEXT NOT NULL,
                customer_phone TEXT NOT NULL,
                customer_email TEXT NOT NULL,
                customer_address TEXT NOT NULL,
                driver_name TEXT NOT NULL,
                driver_phone TEXT NOT NULL,
                driver_status TEXT NOT NULL,
                status TEXT NOT NULL
            )
            """
        )
        conn.execute(
            "INSERT INTO orders VALUES (0, 5, 'Alex', '91234567', 'a@x.com', 'Blk 1', 'Ravi', '81234567', "
            "'AVAILABLE', 'PENDING')"
        )
    conn.close()

    store = load_state(db_path)

    order = store.orders()[0]
    assert order.order_number == 5
    assert order.customer.tags == frozenset()
    assert order.dishes == ()


def test_new_file_declares_every_order_column(db_path: Path):
    save_state(ModelStore(), db_path)

    conn = sqlite3.connect(db_path)
    (create_sql,) = conn.execute("SELECT sql FROM sqlite_master WHERE name = 'orders'").fetchone()
    conn.close()

    assert create_sql.index("customer_tags") < create_sql.index("driver_name")


def test_connections_are_closed(monkeypatch, typical_store: ModelStore, db_path: Path):
    opened = []
    real_connect = sqlite3.connect

    def tracking_connect(*args, **kwargs):
        conn = real_connect(*args, **kwargs)
        opened.append(conn)
        return conn

    monkeypatch.setattr(sqlite3, "connect", tracking_connect)
    save_state(typical_store, db_path)
    load_state(db_path)

    assert len(opened) == 2
    for conn in opened:
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")
