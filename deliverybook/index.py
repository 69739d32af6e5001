"""One-based list indices and their resolution against a displayed list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

from deliverybook.errors import InvalidIndexError
from deliverybook.models import EntityKind

T = TypeVar("T")

MESSAGE_INVALID_DISPLAYED_INDEX: dict[EntityKind, str] = {
    EntityKind.CUSTOMER: "The customer index provided is invalid",
    EntityKind.DRIVER: "The driver index provided is invalid",
    EntityKind.DISH: "The dish index provided is invalid",
    EntityKind.ORDER: "The order index provided is invalid",
}


@dataclass(frozen=True)
class Index:
    """A position in a displayed list, stored zero-based."""

    zero_based: int

    def __post_init__(self) -> None:
        if self.zero_based < 0:
            raise ValueError(f"Index must be non-negative, got {self.zero_based}")

    @property
    def one_based(self) -> int:
        return self.zero_based + 1

    @classmethod
    def from_one_based(cls, one_based: int) -> Index:
        return cls(one_based - 1)

    @classmethod
    def from_zero_based(cls, zero_based: int) -> Index:
        return cls(zero_based)

    def __str__(self) -> str:
        return str(self.one_based)


def resolve_index(items: Sequence[T], index: Index, kind: EntityKind) -> T:
    """Return the item at ``index`` in the displayed list ``items``."""
    if index.zero_based >= len(items):
        raise InvalidIndexError(MESSAGE_INVALID_DISPLAYED_INDEX[kind])
    return items[index.zero_based]
