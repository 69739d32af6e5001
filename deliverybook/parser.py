"""Turn one line of user input into a Command."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

from deliverybook.commands import (
    AddCustomerCommand,
    AddDishCommand,
    AddDriverCommand,
    AddOrderCommand,
    ClearCommand,
    Command,
    DeleteCommand,
    DeleteCustomerCommand,
    DeleteDishCommand,
    DeleteDriverCommand,
    DeleteOrderCommand,
    EditCustomerCommand,
    EditCustomerDescriptor,
    EditDriverStatusCommand,
    EditOrderStatusCommand,
    ExitCommand,
    FindCommand,
    FindCustomerCommand,
    FindDishCommand,
    FindDriverCommand,
    FindOrderCommand,
    HelpCommand,
    ListCustomersCommand,
    ListDishesCommand,
    ListDriversCommand,
    ListOrdersCommand,
    NameContainsKeywordsPredicate,
)
from deliverybook.errors import DuplicateParameterError, InvalidFormatError, MissingParameterError, UnknownCommandError
from deliverybook.models import Customer, Dish, Driver, DriverStatus
from deliverybook.validators import (
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

PREFIX_NAME = "n/"
PREFIX_PHONE = "p/"
PREFIX_EMAIL = "e/"
PREFIX_ADDRESS = "a/"
PREFIX_TAG = "t/"
PREFIX_STATUS = "s/"
PREFIX_PRICE = "pr/"
PREFIX_CUSTOMER = "c/"
PREFIX_DRIVER = "d/"
PREFIX_DISH = "m/"

MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format! \n{}"
MESSAGE_UNKNOWN_COMMAND = "Unknown command"
MESSAGE_DUPLICATE_FIELDS = "Multiple values specified for the following single-valued field(s): {}"


@dataclass
class ArgumentMultimap:
    """Values found after each prefix, in input order, plus the preamble."""

    preamble: str = ""
    values: dict[str, list[str]] = field(default_factory=dict)

    def put(self, prefix: str, value: str) -> None:
        self.values.setdefault(prefix, []).append(value)

    def get_value(self, prefix: str) -> str | None:
        found = self.values.get(prefix)
        if not found:
            return None
        return found[-1]

    def get_all_values(self, prefix: str) -> list[str]:
        return list(self.values.get(prefix, []))

    def has(self, prefix: str) -> bool:
        return prefix in self.values

    def verify_no_duplicate_prefixes_for(self, *prefixes: str) -> None:
        duplicated = tuple(prefix for prefix in prefixes if len(self.values.get(prefix, [])) > 1)
        if duplicated:
            raise DuplicateParameterError(MESSAGE_DUPLICATE_FIELDS.format(" ".join(duplicated)), prefixes=duplicated)


def tokenize(args: str, *prefixes: str) -> ArgumentMultimap:
    """
    Split ``args`` on the given prefixes.

    A prefix only counts at the start of the string or right after whitespace,
    so ``a/Blk 1 p/9123`` yields an address and a phone. Text before the first
    prefix is the preamble.
    """
    multimap = ArgumentMultimap()
    if not prefixes:
        multimap.preamble = args.strip()
        return multimap

    # Longest first so "pr/" is never read as "p/" followed by "r/".
    alternatives = "|".join(re.escape(prefix) for prefix in sorted(prefixes, key=len, reverse=True))
    pattern = re.compile(rf"(?:^|(?<=\s))({alternatives})")
    matches = list(pattern.finditer(args))

    if not matches:
        multimap.preamble = args.strip()
        return multimap

    multimap.preamble = args[: matches[0].start()].strip()
    for current, following in zip(matches, matches[1:] + [None]):
        end = following.start() if following is not None else len(args)
        multimap.put(current.group(1), args[current.end() : end].strip())
    return multimap


def _invalid_format(usage: str) -> MissingParameterError:
    return MissingParameterError(MESSAGE_INVALID_COMMAND_FORMAT.format(usage))


def _require(multimap: ArgumentMultimap, usage: str, *prefixes: str, empty_preamble: bool = False) -> None:
    if not all(multimap.has(prefix) for prefix in prefixes):
        raise _invalid_format(usage)
    if empty_preamble and multimap.preamble:
        raise _invalid_format(usage)


def _require_preamble(multimap: ArgumentMultimap, usage: str) -> None:
    if not multimap.preamble:
        raise _invalid_format(usage)


def parse_add_customer(args: str) -> AddCustomerCommand:
    usage = AddCustomerCommand.MESSAGE_USAGE
    multimap = tokenize(args, PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS, PREFIX_TAG)
    _require(multimap, usage, PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS, empty_preamble=True)
    multimap.verify_no_duplicate_prefixes_for(PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)

    customer = Customer(
        name=parse_name(multimap.get_value(PREFIX_NAME)),
        phone=parse_phone(multimap.get_value(PREFIX_PHONE)),
        email=parse_email(multimap.get_value(PREFIX_EMAIL)),
        address=parse_address(multimap.get_value(PREFIX_ADDRESS)),
        tags=parse_tags(multimap.get_all_values(PREFIX_TAG)),
    )
    return AddCustomerCommand(customer)


def parse_edit_customer(args: str) -> EditCustomerCommand:
    usage = EditCustomerCommand.MESSAGE_USAGE
    multimap = tokenize(args, PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS, PREFIX_TAG)
    _require_preamble(multimap, usage)
    index = parse_index(multimap.preamble)
    multimap.verify_no_duplicate_prefixes_for(PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)

    tags = None
    if multimap.has(PREFIX_TAG):
        tag_values = multimap.get_all_values(PREFIX_TAG)
        # A lone empty "t/" clears every tag.
        tags = frozenset() if tag_values == [""] else parse_tags(tag_values)

    name = multimap.get_value(PREFIX_NAME)
    phone = multimap.get_value(PREFIX_PHONE)
    email = multimap.get_value(PREFIX_EMAIL)
    address = multimap.get_value(PREFIX_ADDRESS)
    descriptor = EditCustomerDescriptor(
        name=parse_name(name) if name is not None else None,
        phone=parse_phone(phone) if phone is not None else None,
        email=parse_email(email) if email is not None else None,
        address=parse_address(address) if address is not None else None,
        tags=tags,
    )
    if not descriptor.is_any_field_edited():
        raise MissingParameterError(EditCustomerCommand.MESSAGE_NOT_EDITED)
    return EditCustomerCommand(index, descriptor)


def parse_add_driver(args: str) -> AddDriverCommand:
    usage = AddDriverCommand.MESSAGE_USAGE
    multimap = tokenize(args, PREFIX_NAME, PREFIX_PHONE, PREFIX_STATUS)
    _require(multimap, usage, PREFIX_NAME, PREFIX_PHONE, empty_preamble=True)
    multimap.verify_no_duplicate_prefixes_for(PREFIX_NAME, PREFIX_PHONE, PREFIX_STATUS)

    status = multimap.get_value(PREFIX_STATUS)
    driver = Driver(
        name=parse_name(multimap.get_value(PREFIX_NAME)),
        phone=parse_phone(multimap.get_value(PREFIX_PHONE)),
        status=parse_driver_status(status) if status is not None else DriverStatus.AVAILABLE,
    )
    return AddDriverCommand(driver)


def parse_driver_status_edit(args: str) -> EditDriverStatusCommand:
    usage = EditDriverStatusCommand.MESSAGE_USAGE
    multimap = tokenize(args, PREFIX_STATUS)
    _require_preamble(multimap, usage)
    index = parse_index(multimap.preamble)
    _require(multimap, usage, PREFIX_STATUS)
    multimap.verify_no_duplicate_prefixes_for(PREFIX_STATUS)
    return EditDriverStatusCommand(index, parse_driver_status(multimap.get_value(PREFIX_STATUS)))


def parse_add_dish(args: str) -> AddDishCommand:
    usage = AddDishCommand.MESSAGE_USAGE
    multimap = tokenize(args, PREFIX_NAME, PREFIX_PRICE)
    _require(multimap, usage, PREFIX_NAME, PREFIX_PRICE, empty_preamble=True)
    multimap.verify_no_duplicate_prefixes_for(PREFIX_NAME, PREFIX_PRICE)

    dish = Dish(
        name=parse_dish_name(multimap.get_value(PREFIX_NAME)),
        price=parse_price(multimap.get_value(PREFIX_PRICE)),
    )
    return AddDishCommand(dish)


def parse_add_order(args: str) -> AddOrderCommand:
    usage = AddOrderCommand.MESSAGE_USAGE
    multimap = tokenize(args, PREFIX_CUSTOMER, PREFIX_DRIVER, PREFIX_DISH)
    _require(multimap, usage, PREFIX_CUSTOMER, PREFIX_DRIVER, PREFIX_DISH, empty_preamble=True)
    multimap.verify_no_duplicate_prefixes_for(PREFIX_CUSTOMER, PREFIX_DRIVER)

    return AddOrderCommand(
        customer_index=parse_index(multimap.get_value(PREFIX_CUSTOMER)),
        driver_index=parse_index(multimap.get_value(PREFIX_DRIVER)),
        dish_indices=tuple(parse_index(value) for value in multimap.get_all_values(PREFIX_DISH)),
    )


def parse_order_status_edit(args: str) -> EditOrderStatusCommand:
    usage = EditOrderStatusCommand.MESSAGE_USAGE
    multimap = tokenize(args, PREFIX_STATUS)
    _require_preamble(multimap, usage)
    index = parse_index(multimap.preamble)
    _require(multimap, usage, PREFIX_STATUS)
    multimap.verify_no_duplicate_prefixes_for(PREFIX_STATUS)
    return EditOrderStatusCommand(index, parse_order_status(multimap.get_value(PREFIX_STATUS)))


def _delete_parser(command_type: type[DeleteCommand]) -> Callable[[str], Command]:
    def parse(args: str) -> Command:
        if not args.strip():
            raise _invalid_format(command_type.MESSAGE_USAGE)
        return command_type(parse_index(args))

    return parse


def _find_parser(command_type: type[FindCommand]) -> Callable[[str], Command]:
    def parse(args: str) -> Command:
        keywords = tuple(args.split())
        if not keywords:
            raise _invalid_format(command_type.MESSAGE_USAGE)
        return command_type(NameContainsKeywordsPredicate(keywords))

    return parse


def _no_argument_parser(command_type: type[Command]) -> Callable[[str], Command]:
    # Trailing text after argument-less commands is ignored.
    def parse(args: str) -> Command:
        return command_type()

    return parse


_PARSERS: dict[str, Callable[[str], Command]] = {
    AddCustomerCommand.COMMAND_WORD: parse_add_customer,
    EditCustomerCommand.COMMAND_WORD: parse_edit_customer,
    DeleteCustomerCommand.COMMAND_WORD: _delete_parser(DeleteCustomerCommand),
    FindCustomerCommand.COMMAND_WORD: _find_parser(FindCustomerCommand),
    ListCustomersCommand.COMMAND_WORD: _no_argument_parser(ListCustomersCommand),
    AddDriverCommand.COMMAND_WORD: parse_add_driver,
    DeleteDriverCommand.COMMAND_WORD: _delete_parser(DeleteDriverCommand),
    EditDriverStatusCommand.COMMAND_WORD: parse_driver_status_edit,
    FindDriverCommand.COMMAND_WORD: _find_parser(FindDriverCommand),
    ListDriversCommand.COMMAND_WORD: _no_argument_parser(ListDriversCommand),
    AddDishCommand.COMMAND_WORD: parse_add_dish,
    DeleteDishCommand.COMMAND_WORD: _delete_parser(DeleteDishCommand),
    FindDishCommand.COMMAND_WORD: _find_parser(FindDishCommand),
    ListDishesCommand.COMMAND_WORD: _no_argument_parser(ListDishesCommand),
    AddOrderCommand.COMMAND_WORD: parse_add_order,
    DeleteOrderCommand.COMMAND_WORD: _delete_parser(DeleteOrderCommand),
    EditOrderStatusCommand.COMMAND_WORD: parse_order_status_edit,
    FindOrderCommand.COMMAND_WORD: _find_parser(FindOrderCommand),
    ListOrdersCommand.COMMAND_WORD: _no_argument_parser(ListOrdersCommand),
    ClearCommand.COMMAND_WORD: _no_argument_parser(ClearCommand),
    HelpCommand.COMMAND_WORD: _no_argument_parser(HelpCommand),
    ExitCommand.COMMAND_WORD: _no_argument_parser(ExitCommand),
}

COMMAND_WORDS: tuple[str, ...] = tuple(_PARSERS)


def parse_command(user_input: str) -> Command:
    """Parse a full input line such as ``mark 1 s/DELIVERED``."""
    stripped = user_input.strip()
    if not stripped:
        raise InvalidFormatError(MESSAGE_INVALID_COMMAND_FORMAT.format(HelpCommand.MESSAGE_USAGE))

    command_word, *rest = stripped.split(maxsplit=1)
    parser = _PARSERS.get(command_word)
    if parser is None:
        raise UnknownCommandError(MESSAGE_UNKNOWN_COMMAND)
    return parser(rest[0] if rest else "")
