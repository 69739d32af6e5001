"""SQLite persistence for the whole store."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path

from deliverybook.errors import DuplicateEntityError, InvalidFormatError, StorageError
from deliverybook.models import Customer, Dish, Driver, EntityKind, Order
from deliverybook.store import ModelStore
from deliverybook.validators import (
    parse_address,
    parse_dish_name,
    parse_driver_status,
    parse_email,
    parse_name,
    parse_order_status,
    parse_phone,
    parse_price,
    parse_tags,
)

logger = logging.getLogger(__name__)

_TAG_SEPARATOR = ","

# Columns checked on every bootstrap; files that lack one get it added.
_CHECKED_COLUMNS: dict[str, dict[str, str]] = {
    "orders": {"customer_tags": "TEXT NOT NULL DEFAULT ''"},
}


def _connect(db_path: str | Path) -> sqlite3.Connection:
    db_file = Path(db_path)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_file)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def bootstrap_schema(conn: sqlite3.Connection) -> None:
    """Create persistence schema if it does not already exist."""
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS customers (
            position INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            phone TEXT NOT NULL,
            email TEXT NOT NULL,
            address TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS customer_tags (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_position INTEGER NOT NULL,
            tag TEXT NOT NULL,
            FOREIGN KEY(customer_position) REFERENCES customers(position) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS drivers (
            position INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            phone TEXT NOT NULL,
            status TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS dishes (
            position INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            price TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS orders (
            position INTEGER PRIMARY KEY,
            order_number INTEGER NOT NULL,
            customer_name TEXT NOT NULL,
            customer_phone TEXT NOT NULL,
            customer_email TEXT NOT NULL,
            customer_address TEXT NOT NULL,
            customer_tags TEXT NOT NULL DEFAULT '',
            driver_name TEXT NOT NULL,
            driver_phone TEXT NOT NULL,
            driver_status TEXT NOT NULL,
            status TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS order_dishes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            order_position INTEGER NOT NULL,
            line_index INTEGER NOT NULL,
            dish_name TEXT NOT NULL,
            dish_price TEXT NOT NULL,
            FOREIGN KEY(order_position) REFERENCES orders(position) ON DELETE CASCADE
        );

        CREATE INDEX IF NOT EXISTS idx_order_dishes_order_line
            ON order_dishes(order_position, line_index);

        CREATE INDEX IF NOT EXISTS idx_customer_tags_customer
            ON customer_tags(customer_position);
        """
    )
    for table, columns in _CHECKED_COLUMNS.items():
        existing = {row[1] for row in conn.execute(f"PRAGMA table_info({table})")}
        for column, definition in columns.items():
            if column not in existing:
                logger.info("Adding missing column %s.%s", table, column)
                conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {definition}")


def save_state(store: ModelStore, db_path: str | Path) -> None:
    """Rewrite every table from ``store`` in one transaction."""
    try:
        with closing(_connect(db_path)) as conn:
            bootstrap_schema(conn)
            with conn:
                _write_all(conn, store)
    except sqlite3.Error as exc:
        raise StorageError(f"Could not save data file {db_path}: {exc}") from exc
    logger.info("Saved %d entities to %s", store.size(), db_path)


def _write_all(conn: sqlite3.Connection, store: ModelStore) -> None:
    for table in ("order_dishes", "orders", "customer_tags", "customers", "drivers", "dishes"):
        conn.execute(f"DELETE FROM {table}")

    for position, customer in enumerate(store.all(EntityKind.CUSTOMER)):
        conn.execute(
            "INSERT INTO customers (position, name, phone, email, address) VALUES (?, ?, ?, ?, ?)",
            (position, customer.name.value, customer.phone.value, customer.email.value, customer.address.value),
        )
        for tag in sorted(customer.tags):
            conn.execute(
                "INSERT INTO customer_tags (customer_position, tag) VALUES (?, ?)",
                (position, tag.value),
            )

    for position, driver in enumerate(store.all(EntityKind.DRIVER)):
        conn.execute(
            "INSERT INTO drivers (position, name, phone, status) VALUES (?, ?, ?, ?)",
            (position, driver.name.value, driver.phone.value, driver.status.value),
        )

    for position, dish in enumerate(store.all(EntityKind.DISH)):
        conn.execute(
            "INSERT INTO dishes (position, name, price) VALUES (?, ?, ?)",
            (position, dish.name.value, dish.price.value),
        )

    for position, order in enumerate(store.all(EntityKind.ORDER)):
        customer, driver = order.customer, order.driver
        conn.execute(
            """
            INSERT INTO orders (
                position, order_number,
                customer_name, customer_phone, customer_email, customer_address, customer_tags,
                driver_name, driver_phone, driver_status, status
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                position,
                order.order_number,
                customer.name.value,
                customer.phone.value,
                customer.email.value,
                customer.address.value,
                _TAG_SEPARATOR.join(tag.value for tag in sorted(customer.tags)),
                driver.name.value,
                driver.phone.value,
                driver.status.value,
                order.status.value,
            ),
        )
        for line_index, dish in enumerate(order.dishes):
            conn.execute(
                """
                INSERT INTO order_dishes (order_position, line_index, dish_name, dish_price)
                VALUES (?, ?, ?, ?)
                """,
                (position, line_index, dish.name.value, dish.price.value),
            )


def load_state(db_path: str | Path) -> ModelStore:
    """
    Read the whole store from ``db_path``.

    A missing file yields an empty store. Rows that fail validation raise
    ``StorageError``; the file is never partially loaded.
    """
    store = ModelStore()
    if not Path(db_path).is_file():
        logger.info("Data file %s not found, starting with an empty store", db_path)
        return store

    try:
        with closing(_connect(db_path)) as conn:
            bootstrap_schema(conn)
            for entity in _read_all(conn):
                store.add(entity)
    except sqlite3.Error as exc:
        raise StorageError(f"Could not read data file {db_path}: {exc}") from exc
    except InvalidFormatError as exc:
        raise StorageError(f"Data file {db_path} holds an invalid record: {exc}") from exc
    except DuplicateEntityError as exc:
        raise StorageError(f"Data file {db_path} holds duplicate records: {exc}") from exc

    logger.info("Loaded %d entities from %s", store.size(), db_path)
    return store


def _read_all(conn: sqlite3.Connection) -> list[Customer | Driver | Dish | Order]:
    tags_by_customer: dict[int, list[str]] = {}
    for customer_position, tag in conn.execute(
        "SELECT customer_position, tag FROM customer_tags ORDER BY id"
    ):
        tags_by_customer.setdefault(customer_position, []).append(tag)

    entities: list[Customer | Driver | Dish | Order] = []
    for position, name, phone, email, address in conn.execute(
        "SELECT position, name, phone, email, address FROM customers ORDER BY position"
    ):
        entities.append(
            Customer(
                name=parse_name(name),
                phone=parse_phone(phone),
                email=parse_email(email),
                address=parse_address(address),
                tags=parse_tags(tags_by_customer.get(position, [])),
            )
        )

    for name, phone, status in conn.execute("SELECT name, phone, status FROM drivers ORDER BY position"):
        entities.append(Driver(name=parse_name(name), phone=parse_phone(phone), status=parse_driver_status(status)))

    for name, price in conn.execute("SELECT name, price FROM dishes ORDER BY position"):
        entities.append(Dish(name=parse_dish_name(name), price=parse_price(price)))

    dishes_by_order: dict[int, list[Dish]] = {}
    for order_position, dish_name, dish_price in conn.execute(
        "SELECT order_position, dish_name, dish_price FROM order_dishes ORDER BY order_position, line_index"
    ):
        dishes_by_order.setdefault(order_position, []).append(
            Dish(name=parse_dish_name(dish_name), price=parse_price(dish_price))
        )

    for row in conn.execute(
        """
        SELECT position, order_number,
               customer_name, customer_phone, customer_email, customer_address, customer_tags,
               driver_name, driver_phone, driver_status, status
        FROM orders ORDER BY position
        """
    ):
        (
            position,
            order_number,
            customer_name,
            customer_phone,
            customer_email,
            customer_address,
            customer_tags,
            driver_name,
            driver_phone,
            driver_status,
            status,
        ) = row
        entities.append(
            Order(
                order_number=int(order_number),
                customer=Customer(
                    name=parse_name(customer_name),
                    phone=parse_phone(customer_phone),
                    email=parse_email(customer_email),
                    address=parse_address(customer_address),
                    tags=parse_tags(tag for tag in customer_tags.split(_TAG_SEPARATOR) if tag),
                ),
                driver=Driver(
                    name=parse_name(driver_name),
                    phone=parse_phone(driver_phone),
                    status=parse_driver_status(driver_status),
                ),
                dishes=tuple(dishes_by_order.get(position, [])),
                status=parse_order_status(status),
            )
        )
    return entities
