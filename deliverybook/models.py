"""Domain models for deliverybook."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum


class EntityKind(Enum):
    """The four collections held by the store."""

    CUSTOMER = "customer"
    DRIVER = "driver"
    DISH = "dish"
    ORDER = "order"


class DriverStatus(Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"
    DELIVERING = "DELIVERING"

    def __str__(self) -> str:
        return self.value


class OrderStatus(Enum):
    PENDING = "PENDING"
    PREPARING = "PREPARING"
    DELIVERING = "DELIVERING"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Name:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Phone:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Address:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Tag:
    value: str

    def __str__(self) -> str:
        return f"[{self.value}]"


@dataclass(frozen=True)
class Price:
    """A validated price string, kept as typed so it prints as entered."""

    value: str

    @property
    def amount(self) -> Decimal:
        return Decimal(self.value)

    def __str__(self) -> str:
        return f"${self.amount:.2f}"


@dataclass(frozen=True)
class Customer:
    """A customer; two customers with the same fields are the same customer."""

    name: Name
    phone: Phone
    email: Email
    address: Address
    tags: frozenset[Tag] = field(default_factory=frozenset)

    def with_fields(self, **changes: object) -> Customer:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def __str__(self) -> str:
        text = f"{self.name}; Phone: {self.phone}; Email: {self.email}; Address: {self.address}"
        if self.tags:
            text += "; Tags: " + "".join(str(tag) for tag in sorted(self.tags))
        return text


@dataclass(frozen=True)
class Driver:
    name: Name
    phone: Phone
    status: DriverStatus = DriverStatus.AVAILABLE

    def update_status(self, status: DriverStatus) -> Driver:
        return replace(self, status=status)

    def __str__(self) -> str:
        return f"{self.name}; Phone: {self.phone}; Status: {self.status}"


@dataclass(frozen=True)
class Dish:
    name: Name
    price: Price

    def __str__(self) -> str:
        return f"{self.name} ({self.price})"


@dataclass(frozen=True)
class Order:
    """A delivery order holding snapshots of its customer, driver and dishes."""

    order_number: int
    customer: Customer
    driver: Driver
    dishes: tuple[Dish, ...]
    status: OrderStatus = OrderStatus.PENDING

    def update_status(self, status: OrderStatus) -> Order:
        return replace(self, status=status)

    @property
    def customer_name(self) -> str:
        return self.customer.name.value

    @property
    def customer_phone(self) -> str:
        return self.customer.phone.value

    @property
    def driver_name(self) -> str:
        return self.driver.name.value

    @property
    def total(self) -> Decimal:
        return sum((dish.price.amount for dish in self.dishes), Decimal("0"))

    def __str__(self) -> str:
        dishes = ", ".join(dish.name.value for dish in self.dishes)
        return (
            f"#{self.order_number} for {self.customer_name} ({self.customer_phone}); "
            f"Driver: {self.driver_name}; Dishes: {dishes}; Status: {self.status}"
        )


Entity = Customer | Driver | Dish | Order

_KIND_BY_TYPE: dict[type, EntityKind] = {
    Customer: EntityKind.CUSTOMER,
    Driver: EntityKind.DRIVER,
    Dish: EntityKind.DISH,
    Order: EntityKind.ORDER,
}


def kind_of(entity: Entity) -> EntityKind:
    """Return the collection an entity belongs to."""
    try:
        return _KIND_BY_TYPE[type(entity)]
    except KeyError:
        raise TypeError(f"Not a deliverybook entity: {entity!r}") from None
