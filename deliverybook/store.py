"""In-memory entity collections and their active display filters."""

from __future__ import annotations

from typing import Callable

from deliverybook.errors import DuplicateEntityError, EntityNotFoundError
from deliverybook.models import Customer, Dish, Driver, Entity, EntityKind, Order, kind_of

Predicate = Callable[[Entity], bool]


def SHOW_ALL(entity: Entity) -> bool:
    """Filter predicate that keeps every entity."""
    return True


_DUPLICATE_MESSAGES: dict[EntityKind, str] = {
    EntityKind.CUSTOMER: "This customer already exists in the address book.",
    EntityKind.DRIVER: "This driver already exists in the address book.",
    EntityKind.DISH: "This dish already exists in the address book.",
    EntityKind.ORDER: "This order already exists in the address book.",
}

_MISSING_MESSAGES: dict[EntityKind, str] = {
    EntityKind.CUSTOMER: "This customer is not in the address book.",
    EntityKind.DRIVER: "This driver is not in the address book.",
    EntityKind.DISH: "This dish is not in the address book.",
    EntityKind.ORDER: "This order is not in the address book.",
}


def duplicate_message(kind: EntityKind) -> str:
    return _DUPLICATE_MESSAGES[kind]


class ModelStore:
    """
    Holds every customer, driver, dish and order, plus one filter per kind.

    Entities keep insertion order. Filtered views are recomputed on every
    ``filtered`` call, so they always reflect the latest mutation.
    """

    def __init__(self) -> None:
        self._items: dict[EntityKind, list[Entity]] = {kind: [] for kind in EntityKind}
        self._predicates: dict[EntityKind, Predicate] = {kind: SHOW_ALL for kind in EntityKind}

    def has(self, entity: Entity) -> bool:
        return entity in self._items[kind_of(entity)]

    def add(self, entity: Entity) -> None:
        kind = kind_of(entity)
        if entity in self._items[kind]:
            raise DuplicateEntityError(_DUPLICATE_MESSAGES[kind])
        self._items[kind].append(entity)

    def remove(self, entity: Entity) -> None:
        kind = kind_of(entity)
        try:
            self._items[kind].remove(entity)
        except ValueError:
            raise EntityNotFoundError(_MISSING_MESSAGES[kind]) from None

    def set_entity(self, target: Entity, edited: Entity) -> None:
        """Replace ``target`` with ``edited`` at the same position."""
        kind = kind_of(target)
        if kind_of(edited) is not kind:
            raise TypeError(f"Cannot replace a {kind.value} with a {kind_of(edited).value}")

        items = self._items[kind]
        try:
            position = items.index(target)
        except ValueError:
            raise EntityNotFoundError(_MISSING_MESSAGES[kind]) from None

        if edited != target and edited in items:
            raise DuplicateEntityError(_DUPLICATE_MESSAGES[kind])
        items[position] = edited

    def all(self, kind: EntityKind) -> list[Entity]:
        return list(self._items[kind])

    def filtered(self, kind: EntityKind) -> list[Entity]:
        predicate = self._predicates[kind]
        return [entity for entity in self._items[kind] if predicate(entity)]

    def update_filter(self, kind: EntityKind, predicate: Predicate) -> None:
        self._predicates[kind] = predicate

    def is_filtered(self, kind: EntityKind) -> bool:
        return self._predicates[kind] is not SHOW_ALL

    def clear(self) -> None:
        for kind in EntityKind:
            self._items[kind].clear()
            self._predicates[kind] = SHOW_ALL

    def next_order_number(self) -> int:
        numbers = [order.order_number for order in self._items[EntityKind.ORDER]]
        return max(numbers, default=0) + 1

    # Typed accessors for callers that work with one kind.

    def customers(self) -> list[Customer]:
        return self.filtered(EntityKind.CUSTOMER)  # type: ignore[return-value]

    def drivers(self) -> list[Driver]:
        return self.filtered(EntityKind.DRIVER)  # type: ignore[return-value]

    def dishes(self) -> list[Dish]:
        return self.filtered(EntityKind.DISH)  # type: ignore[return-value]

    def orders(self) -> list[Order]:
        return self.filtered(EntityKind.ORDER)  # type: ignore[return-value]

    def size(self, kind: EntityKind | None = None) -> int:
        if kind is not None:
            return len(self._items[kind])
        return sum(len(items) for items in self._items.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelStore):
            return NotImplemented
        return self._items == other._items
