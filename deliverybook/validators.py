"""Field validators that turn raw argument strings into typed values.

Every ``parse_*`` function strips surrounding whitespace, checks the value
against a fixed rule and either returns the wrapped value or raises
``InvalidFormatError`` carrying the constraint message of that field.
"""

from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum
from typing import Iterable, TypeVar

from deliverybook.errors import IndexFormatError, InvalidFormatError
from deliverybook.index import Index
from deliverybook.models import Address, DriverStatus, Email, Name, OrderStatus, Phone, Price, Tag

E = TypeVar("E", bound=Enum)

MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."
MESSAGE_INVALID_DRIVER_STATUS = "This driver status is invalid."
MESSAGE_INVALID_ORDER_STATUS = "This order status is invalid."

NAME_CONSTRAINTS = "Names should only contain alphanumeric characters and spaces, and it should not be blank"
DISH_NAME_CONSTRAINTS = "Dish names should only contain alphanumeric characters and spaces, and it should not be blank"
PHONE_CONSTRAINTS = "Phone numbers should only contain numbers, and it should be at least 3 digits long"
ADDRESS_CONSTRAINTS = "Addresses can take any values, and it should not be blank"
TAG_CONSTRAINTS = "Tags names should be alphanumeric"
PRICE_CONSTRAINTS = (
    "Prices should be a non-negative number with at most 2 decimal places, and at most 10000"
)
EMAIL_CONSTRAINTS = (
    "Emails should be of the format local-part@domain and adhere to the following constraints:\n"
    "1. The local-part should only contain alphanumeric characters and these special characters, "
    "excluding the parentheses, (+_.-). The local-part may not start or end with any special characters.\n"
    "2. This is followed by a '@' and then a domain name. The domain name is made up of domain labels "
    "separated by periods.\n"
    "The domain name must:\n"
    "    - end with a domain label at least 2 characters long\n"
    "    - have each domain label start and end with alphanumeric characters\n"
    "    - have each domain label consist of alphanumeric characters, separated only by hyphens, if any."
)

PRICE_MAX = Decimal("10000")

_INDEX_PATTERN = re.compile(r"^[0-9]+$")
_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 ]*$")
_PHONE_PATTERN = re.compile(r"^[0-9]{3,}$")
_ADDRESS_PATTERN = re.compile(r"^\S.*$", re.DOTALL)
_TAG_PATTERN = re.compile(r"^[A-Za-z0-9]+$")
_PRICE_PATTERN = re.compile(r"^[0-9]+(\.[0-9]{1,2})?$")

_EMAIL_LOCAL = r"[A-Za-z0-9]+([+_.-][A-Za-z0-9]+)*"
_EMAIL_LABEL = r"[A-Za-z0-9]+(-[A-Za-z0-9]+)*"
_EMAIL_PATTERN = re.compile(
    rf"^{_EMAIL_LOCAL}@({_EMAIL_LABEL}\.)*(?=[A-Za-z0-9-]{{2,}}$){_EMAIL_LABEL}$"
)


def is_valid_name(text: str) -> bool:
    return bool(_NAME_PATTERN.match(text))


def is_valid_phone(text: str) -> bool:
    return bool(_PHONE_PATTERN.match(text))


def is_valid_email(text: str) -> bool:
    return bool(_EMAIL_PATTERN.match(text))


def is_valid_address(text: str) -> bool:
    return bool(_ADDRESS_PATTERN.match(text))


def is_valid_tag(text: str) -> bool:
    return bool(_TAG_PATTERN.match(text))


def is_valid_price(text: str) -> bool:
    if not _PRICE_PATTERN.match(text):
        return False
    return Decimal(text) <= PRICE_MAX


def parse_index(one_based_index: str) -> Index:
    """
    Parse ``one_based_index`` into an ``Index``.

    Raises ``IndexFormatError`` if the text is not a non-zero unsigned integer.
    """
    trimmed = one_based_index.strip()
    if not _INDEX_PATTERN.match(trimmed) or int(trimmed) == 0:
        raise IndexFormatError(MESSAGE_INVALID_INDEX)
    return Index.from_one_based(int(trimmed))


def parse_name(name: str) -> Name:
    trimmed = name.strip()
    if not is_valid_name(trimmed):
        raise InvalidFormatError(NAME_CONSTRAINTS)
    return Name(trimmed)


def parse_dish_name(name: str) -> Name:
    trimmed = name.strip()
    if not is_valid_name(trimmed):
        raise InvalidFormatError(DISH_NAME_CONSTRAINTS)
    return Name(trimmed)


def parse_phone(phone: str) -> Phone:
    trimmed = phone.strip()
    if not is_valid_phone(trimmed):
        raise InvalidFormatError(PHONE_CONSTRAINTS)
    return Phone(trimmed)


def parse_email(email: str) -> Email:
    trimmed = email.strip()
    if not is_valid_email(trimmed):
        raise InvalidFormatError(EMAIL_CONSTRAINTS)
    return Email(trimmed)


def parse_address(address: str) -> Address:
    trimmed = address.strip()
    if not is_valid_address(trimmed):
        raise InvalidFormatError(ADDRESS_CONSTRAINTS)
    return Address(trimmed)


def parse_tag(tag: str) -> Tag:
    trimmed = tag.strip()
    if not is_valid_tag(trimmed):
        raise InvalidFormatError(TAG_CONSTRAINTS)
    return Tag(trimmed)


def parse_tags(tags: Iterable[str]) -> frozenset[Tag]:
    return frozenset(parse_tag(tag) for tag in tags)


def parse_price(price: str) -> Price:
    trimmed = price.strip()
    if not is_valid_price(trimmed):
        raise InvalidFormatError(PRICE_CONSTRAINTS)
    return Price(trimmed)


def _parse_enum(enum_type: type[E], text: str, message: str) -> E:
    # Case-insensitive match against the closed set of member names.
    trimmed = text.strip()
    for member in enum_type:
        if member.name.lower() == trimmed.lower():
            return member
    raise InvalidFormatError(message)


def parse_driver_status(status: str) -> DriverStatus:
    return _parse_enum(DriverStatus, status, MESSAGE_INVALID_DRIVER_STATUS)


def parse_order_status(status: str) -> OrderStatus:
    return _parse_enum(OrderStatus, status, MESSAGE_INVALID_ORDER_STATUS)
