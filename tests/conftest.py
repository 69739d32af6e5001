"""Pytest configuration and fixtures for deliverybook tests."""

from pathlib import Path

import pytest

from deliverybook.logic import LogicManager
from deliverybook.models import (
    Address,
    Customer,
    Dish,
    Driver,
    DriverStatus,
    Email,
    Name,
    Order,
    OrderStatus,
    Phone,
    Price,
    Tag,
)
from deliverybook.store import ModelStore


@pytest.fixture
def alex() -> Customer:
    return Customer(
        name=Name("Alex"),
        phone=Phone("91234567"),
        email=Email("a@x.com"),
        address=Address("Blk 1"),
    )


@pytest.fixture
def bernice() -> Customer:
    return Customer(
        name=Name("Bernice Yu"),
        phone=Phone("99272758"),
        email=Email("berniceyu@example.com"),
        address=Address("Blk 30 Lorong 3 Serangoon Gardens, #07-18"),
        tags=frozenset({Tag("colleagues"), Tag("friends")}),
    )


@pytest.fixture
def ravi() -> Driver:
    return Driver(name=Name("Ravi"), phone=Phone("81234567"))


@pytest.fixture
def mei() -> Driver:
    return Driver(name=Name("Mei Lin"), phone=Phone("87654321"), status=DriverStatus.DELIVERING)


@pytest.fixture
def chicken_rice() -> Dish:
    return Dish(name=Name("Chicken Rice"), price=Price("4.50"))


@pytest.fixture
def laksa() -> Dish:
    return Dish(name=Name("Laksa"), price=Price("6"))


@pytest.fixture
def typical_store(alex, bernice, ravi, mei, chicken_rice, laksa) -> ModelStore:
    """Two of each kind; order 1 is Alex's, order 2 is Bernice's."""
    store = ModelStore()
    for entity in (alex, bernice, ravi, mei, chicken_rice, laksa):
        store.add(entity)
    store.add(Order(order_number=1, customer=alex, driver=ravi, dishes=(chicken_rice,)))
    store.add(
        Order(
            order_number=2,
            customer=bernice,
            driver=mei,
            dishes=(chicken_rice, laksa),
            status=OrderStatus.DELIVERING,
        )
    )
    return store


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "deliverybook.db"


@pytest.fixture
def logic(typical_store: ModelStore, db_path: Path) -> LogicManager:
    return LogicManager(typical_store, db_path)
