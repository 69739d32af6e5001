"""Exception hierarchy for deliverybook."""

from __future__ import annotations


class DeliveryBookError(Exception):
    """Base exception for all deliverybook errors."""


class ParseError(DeliveryBookError):
    """User input could not be turned into a command."""


class InvalidFormatError(ParseError):
    """A field or argument string does not match its expected format."""


class MissingParameterError(InvalidFormatError):
    """A required prefixed parameter (or the preamble) is absent."""


class DuplicateParameterError(InvalidFormatError):
    """A single-valued prefix was given more than once."""

    def __init__(self, message: str, *, prefixes: tuple[str, ...] = ()) -> None:
        self.prefixes = prefixes
        super().__init__(message)


class UnknownCommandError(ParseError):
    """The command word matches no registered command."""


class CommandError(DeliveryBookError):
    """A parsed command could not be applied to the store."""


class InvalidIndexError(CommandError):
    """An index does not point into the displayed list."""


class IndexFormatError(InvalidFormatError, InvalidIndexError):
    """An index token is not a non-zero unsigned integer."""


class DuplicateEntityError(CommandError):
    """A value-equal entity is already in the store."""


class EntityNotFoundError(CommandError):
    """The entity to remove or replace is not in the store."""


class StorageError(DeliveryBookError):
    """The data file could not be read or written."""
