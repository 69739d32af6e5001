"""Executable commands, one class per user action."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from deliverybook.errors import DuplicateEntityError
from deliverybook.index import Index, resolve_index
from deliverybook.models import (
    Address,
    Customer,
    Dish,
    Driver,
    DriverStatus,
    Email,
    Entity,
    EntityKind,
    Name,
    Order,
    OrderStatus,
    Phone,
    Tag,
)
from deliverybook.store import SHOW_ALL, ModelStore, duplicate_message


@dataclass(frozen=True)
class CommandResult:
    """Feedback for the user plus which panels need a redraw."""

    feedback: str
    show_help: bool = False
    exit: bool = False
    refresh: frozenset[EntityKind] = field(default_factory=frozenset)


class Command:
    """A single-use action built from validated parameters."""

    COMMAND_WORD: ClassVar[str] = ""
    MESSAGE_USAGE: ClassVar[str] = ""

    def execute(self, store: ModelStore) -> CommandResult:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({fields})"


def _refresh(*kinds: EntityKind) -> frozenset[EntityKind]:
    return frozenset(kinds)


# Customers


class AddCustomerCommand(Command):
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        "add: Adds a customer to the address book.\n"
        "Parameters: n/NAME p/PHONE e/EMAIL a/ADDRESS [t/TAG]...\n"
        "Example: add n/John Doe p/98765432 e/johnd@example.com a/311, Clementi Ave 2, #02-25 t/friends"
    )
    MESSAGE_SUCCESS = "New customer added: {}"

    def __init__(self, customer: Customer) -> None:
        self.customer = customer

    def execute(self, store: ModelStore) -> CommandResult:
        if store.has(self.customer):
            raise DuplicateEntityError(duplicate_message(EntityKind.CUSTOMER))
        store.add(self.customer)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.customer), refresh=_refresh(EntityKind.CUSTOMER))


@dataclass(frozen=True)
class EditCustomerDescriptor:
    """Fields to change on a customer; ``None`` leaves a field untouched."""

    name: Name | None = None
    phone: Phone | None = None
    email: Email | None = None
    address: Address | None = None
    tags: frozenset[Tag] | None = None

    def is_any_field_edited(self) -> bool:
        return any(value is not None for value in (self.name, self.phone, self.email, self.address, self.tags))

    def apply(self, customer: Customer) -> Customer:
        changes = {
            key: value
            for key, value in (
                ("name", self.name),
                ("phone", self.phone),
                ("email", self.email),
                ("address", self.address),
                ("tags", self.tags),
            )
            if value is not None
        }
        return customer.with_fields(**changes)


class EditCustomerCommand(Command):
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        "edit: Edits the details of the customer identified by the index number used in the displayed "
        "customer list. Existing values will be overwritten by the input values.\n"
        "Parameters: INDEX (must be a positive integer) [n/NAME] [p/PHONE] [e/EMAIL] [a/ADDRESS] [t/TAG]...\n"
        "Example: edit 1 p/91234567 e/johndoe@example.com"
    )
    MESSAGE_SUCCESS = "Edited customer: {}"
    MESSAGE_NOT_EDITED = "At least one field to edit must be provided."

    def __init__(self, index: Index, descriptor: EditCustomerDescriptor) -> None:
        self.index = index
        self.descriptor = descriptor

    def execute(self, store: ModelStore) -> CommandResult:
        target = resolve_index(store.customers(), self.index, EntityKind.CUSTOMER)
        edited = self.descriptor.apply(target)
        _replace(store, EntityKind.CUSTOMER, target, edited)
        return CommandResult(self.MESSAGE_SUCCESS.format(edited), refresh=_refresh(EntityKind.CUSTOMER))


# Drivers


class AddDriverCommand(Command):
    COMMAND_WORD = "add-driver"
    MESSAGE_USAGE = (
        "add-driver: Adds a driver to the address book.\n"
        "Parameters: n/NAME p/PHONE [s/STATUS]\n"
        "Example: add-driver n/Ravi p/81234567 s/AVAILABLE"
    )
    MESSAGE_SUCCESS = "New driver added: {}"

    def __init__(self, driver: Driver) -> None:
        self.driver = driver

    def execute(self, store: ModelStore) -> CommandResult:
        if store.has(self.driver):
            raise DuplicateEntityError(duplicate_message(EntityKind.DRIVER))
        store.add(self.driver)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.driver), refresh=_refresh(EntityKind.DRIVER))


class EditDriverStatusCommand(Command):
    COMMAND_WORD = "status"
    MESSAGE_USAGE = (
        "status: Edits a driver status.\n"
        "Parameters: INDEX s/STATUS\n"
        "Example: status 1 s/DELIVERING"
    )
    MESSAGE_SUCCESS = "Driver status updated: {}"

    def __init__(self, index: Index, status: DriverStatus) -> None:
        self.index = index
        self.status = status

    def execute(self, store: ModelStore) -> CommandResult:
        target = resolve_index(store.drivers(), self.index, EntityKind.DRIVER)
        edited = target.update_status(self.status)
        _replace(store, EntityKind.DRIVER, target, edited)
        return CommandResult(self.MESSAGE_SUCCESS.format(edited), refresh=_refresh(EntityKind.DRIVER))


# Dishes


class AddDishCommand(Command):
    COMMAND_WORD = "add-dish"
    MESSAGE_USAGE = (
        "add-dish: Adds a dish to the menu.\n"
        "Parameters: n/NAME pr/PRICE\n"
        "Example: add-dish n/Chicken Rice pr/4.50"
    )
    MESSAGE_SUCCESS = "New dish added: {}"

    def __init__(self, dish: Dish) -> None:
        self.dish = dish

    def execute(self, store: ModelStore) -> CommandResult:
        if store.has(self.dish):
            raise DuplicateEntityError(duplicate_message(EntityKind.DISH))
        store.add(self.dish)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.dish), refresh=_refresh(EntityKind.DISH))


# Orders


class AddOrderCommand(Command):
    COMMAND_WORD = "add-order"
    MESSAGE_USAGE = (
        "add-order: Creates an order from the displayed customer, driver and dish lists.\n"
        "Parameters: c/CUSTOMER_INDEX d/DRIVER_INDEX m/DISH_INDEX [m/DISH_INDEX]...\n"
        "Example: add-order c/1 d/2 m/1 m/3"
    )
    MESSAGE_SUCCESS = "New order added: {}"

    def __init__(self, customer_index: Index, driver_index: Index, dish_indices: tuple[Index, ...]) -> None:
        self.customer_index = customer_index
        self.driver_index = driver_index
        self.dish_indices = dish_indices

    def execute(self, store: ModelStore) -> CommandResult:
        customer = resolve_index(store.customers(), self.customer_index, EntityKind.CUSTOMER)
        driver = resolve_index(store.drivers(), self.driver_index, EntityKind.DRIVER)
        displayed_dishes = store.dishes()
        dishes = tuple(resolve_index(displayed_dishes, index, EntityKind.DISH) for index in self.dish_indices)

        order = Order(
            order_number=store.next_order_number(),
            customer=customer,
            driver=driver,
            dishes=dishes,
        )
        store.add(order)
        return CommandResult(self.MESSAGE_SUCCESS.format(order), refresh=_refresh(EntityKind.ORDER))


class EditOrderStatusCommand(Command):
    COMMAND_WORD = "mark"
    MESSAGE_USAGE = (
        "mark: Edits an order status.\n"
        "Parameters: INDEX s/STATUS\n"
        "Example: mark 1 s/DELIVERED"
    )
    MESSAGE_SUCCESS = "Order status updated: {}"

    def __init__(self, index: Index, status: OrderStatus) -> None:
        self.index = index
        self.status = status

    def execute(self, store: ModelStore) -> CommandResult:
        target = resolve_index(store.orders(), self.index, EntityKind.ORDER)
        edited = target.update_status(self.status)
        _replace(store, EntityKind.ORDER, target, edited)
        return CommandResult(self.MESSAGE_SUCCESS.format(edited), refresh=_refresh(EntityKind.ORDER))


def _replace(store: ModelStore, kind: EntityKind, target: Entity, edited: Entity) -> None:
    # Every successful edit shows the whole list again, even if nothing changed.
    if edited != target and store.has(edited):
        raise DuplicateEntityError(duplicate_message(kind))
    store.set_entity(target, edited)
    store.update_filter(kind, SHOW_ALL)


# Shared shapes: delete / find / list per kind


_KIND_LABELS: dict[EntityKind, tuple[str, str]] = {
    EntityKind.CUSTOMER: ("customer", "customers"),
    EntityKind.DRIVER: ("driver", "drivers"),
    EntityKind.DISH: ("dish", "dishes"),
    EntityKind.ORDER: ("order", "orders"),
}


class DeleteCommand(Command):
    """Deletes the entity at an index of the displayed list of one kind."""

    KIND: ClassVar[EntityKind]
    MESSAGE_SUCCESS: ClassVar[str] = "Deleted {}: {}"

    def __init__(self, index: Index) -> None:
        self.index = index

    def execute(self, store: ModelStore) -> CommandResult:
        target = resolve_index(store.filtered(self.KIND), self.index, self.KIND)
        store.remove(target)
        singular, _ = _KIND_LABELS[self.KIND]
        return CommandResult(self.MESSAGE_SUCCESS.format(singular, target), refresh=_refresh(self.KIND))


class DeleteCustomerCommand(DeleteCommand):
    KIND = EntityKind.CUSTOMER
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        "delete: Deletes the customer identified by the index number used in the displayed customer list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: delete 1"
    )


class DeleteDriverCommand(DeleteCommand):
    KIND = EntityKind.DRIVER
    COMMAND_WORD = "delete-driver"
    MESSAGE_USAGE = (
        "delete-driver: Deletes the driver identified by the index number used in the displayed driver list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: delete-driver 1"
    )


class DeleteDishCommand(DeleteCommand):
    KIND = EntityKind.DISH
    COMMAND_WORD = "delete-dish"
    MESSAGE_USAGE = (
        "delete-dish: Deletes the dish identified by the index number used in the displayed dish list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: delete-dish 1"
    )


class DeleteOrderCommand(DeleteCommand):
    KIND = EntityKind.ORDER
    COMMAND_WORD = "delete-order"
    MESSAGE_USAGE = (
        "delete-order: Deletes the order identified by the index number used in the displayed order list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: delete-order 1"
    )


def _name_of(entity: Entity) -> str:
    if isinstance(entity, Order):
        return entity.customer_name
    return entity.name.value


@dataclass(frozen=True)
class NameContainsKeywordsPredicate:
    """Matches entities whose name contains any keyword as a whole word, ignoring case.

    Orders are matched on their customer's name.
    """

    keywords: tuple[str, ...]

    def __call__(self, entity: Entity) -> bool:
        words = {word.lower() for word in _name_of(entity).split()}
        return any(keyword.lower() in words for keyword in self.keywords)


class FindCommand(Command):
    KIND: ClassVar[EntityKind]
    MESSAGE_LISTED = "{} {} listed!"

    def __init__(self, predicate: NameContainsKeywordsPredicate) -> None:
        self.predicate = predicate

    def execute(self, store: ModelStore) -> CommandResult:
        store.update_filter(self.KIND, self.predicate)
        count = len(store.filtered(self.KIND))
        singular, plural = _KIND_LABELS[self.KIND]
        return CommandResult(
            self.MESSAGE_LISTED.format(count, singular if count == 1 else plural),
            refresh=_refresh(self.KIND),
        )


class FindCustomerCommand(FindCommand):
    KIND = EntityKind.CUSTOMER
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        "find: Finds all customers whose names contain any of the specified keywords (case-insensitive) "
        "and displays them as a list with index numbers.\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        "Example: find alice bob charlie"
    )


class FindDriverCommand(FindCommand):
    KIND = EntityKind.DRIVER
    COMMAND_WORD = "find-driver"
    MESSAGE_USAGE = (
        "find-driver: Finds all drivers whose names contain any of the specified keywords (case-insensitive).\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        "Example: find-driver ravi"
    )


class FindDishCommand(FindCommand):
    KIND = EntityKind.DISH
    COMMAND_WORD = "find-dish"
    MESSAGE_USAGE = (
        "find-dish: Finds all dishes whose names contain any of the specified keywords (case-insensitive).\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        "Example: find-dish rice"
    )


class FindOrderCommand(FindCommand):
    KIND = EntityKind.ORDER
    COMMAND_WORD = "find-order"
    MESSAGE_USAGE = (
        "find-order: Finds all orders whose customer names contain any of the specified keywords "
        "(case-insensitive).\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        "Example: find-order alex"
    )


class ListCommand(Command):
    KIND: ClassVar[EntityKind]
    MESSAGE_SUCCESS = "Listed all {}"

    def execute(self, store: ModelStore) -> CommandResult:
        store.update_filter(self.KIND, SHOW_ALL)
        _, plural = _KIND_LABELS[self.KIND]
        return CommandResult(self.MESSAGE_SUCCESS.format(plural), refresh=_refresh(self.KIND))


class ListCustomersCommand(ListCommand):
    KIND = EntityKind.CUSTOMER
    COMMAND_WORD = "list"
    MESSAGE_USAGE = "list: Shows all customers."


class ListDriversCommand(ListCommand):
    KIND = EntityKind.DRIVER
    COMMAND_WORD = "list-drivers"
    MESSAGE_USAGE = "list-drivers: Shows all drivers."


class ListDishesCommand(ListCommand):
    KIND = EntityKind.DISH
    COMMAND_WORD = "list-dishes"
    MESSAGE_USAGE = "list-dishes: Shows all dishes."


class ListOrdersCommand(ListCommand):
    KIND = EntityKind.ORDER
    COMMAND_WORD = "list-orders"
    MESSAGE_USAGE = "list-orders: Shows all orders."


# App-level


class ClearCommand(Command):
    COMMAND_WORD = "clear"
    MESSAGE_USAGE = "clear: Removes every customer, driver, dish and order."
    MESSAGE_SUCCESS = "Address book has been cleared!"

    def execute(self, store: ModelStore) -> CommandResult:
        store.clear()
        return CommandResult(self.MESSAGE_SUCCESS, refresh=frozenset(EntityKind))


class HelpCommand(Command):
    COMMAND_WORD = "help"
    MESSAGE_USAGE = "help: Shows program usage instructions."
    SHOWING_HELP_MESSAGE = "Opened help window."

    def execute(self, store: ModelStore) -> CommandResult:
        return CommandResult(self.SHOWING_HELP_MESSAGE, show_help=True)


class ExitCommand(Command):
    COMMAND_WORD = "exit"
    MESSAGE_USAGE = "exit: Exits the program."
    MESSAGE_EXIT_ACKNOWLEDGEMENT = "Exiting as requested ..."

    def execute(self, store: ModelStore) -> CommandResult:
        return CommandResult(self.MESSAGE_EXIT_ACKNOWLEDGEMENT, exit=True)


# Commands that change stored data; the logic layer saves after these.
MUTATING_COMMANDS: tuple[type[Command], ...] = (
    AddCustomerCommand,
    EditCustomerCommand,
    AddDriverCommand,
    EditDriverStatusCommand,
    AddDishCommand,
    AddOrderCommand,
    EditOrderStatusCommand,
    DeleteCommand,
    ClearCommand,
)

ALL_COMMANDS: tuple[type[Command], ...] = (
    AddCustomerCommand,
    EditCustomerCommand,
    DeleteCustomerCommand,
    FindCustomerCommand,
    ListCustomersCommand,
    AddDriverCommand,
    DeleteDriverCommand,
    EditDriverStatusCommand,
    FindDriverCommand,
    ListDriversCommand,
    AddDishCommand,
    DeleteDishCommand,
    FindDishCommand,
    ListDishesCommand,
    AddOrderCommand,
    DeleteOrderCommand,
    EditOrderStatusCommand,
    FindOrderCommand,
    ListOrdersCommand,
    ClearCommand,
    HelpCommand,
    ExitCommand,
)
