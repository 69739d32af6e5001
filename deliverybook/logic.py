"""Parse, execute and persist: the one entry point the UI talks to."""

from __future__ import annotations

import logging
from pathlib import Path

from deliverybook.commands import MUTATING_COMMANDS, CommandResult
from deliverybook.errors import CommandError, DeliveryBookError, StorageError
from deliverybook.models import Entity, EntityKind
from deliverybook.parser import parse_command
from deliverybook.persistence import load_state, save_state
from deliverybook.store import ModelStore

logger = logging.getLogger(__name__)


class LogicManager:
    """Runs one command at a time against a store and saves after each change."""

    def __init__(self, store: ModelStore, db_path: str | Path | None = None) -> None:
        self.store = store
        self.db_path = db_path

    @classmethod
    def from_file(cls, db_path: str | Path) -> LogicManager:
        """Load the store from ``db_path``, falling back to an empty store if it is unreadable."""
        try:
            store = load_state(db_path)
        except StorageError as exc:
            logger.warning("Starting with an empty store: %s", exc)
            store = ModelStore()
        return cls(store, db_path)

    def execute(self, command_text: str) -> CommandResult:
        """
        Parse and run ``command_text``.

        Parse and command errors propagate unchanged so the caller can show
        their message. A failed save surfaces as ``CommandError`` after the
        in-memory change has already been applied.
        """
        logger.info("Executing: %s", command_text)
        try:
            command = parse_command(command_text)
            result = command.execute(self.store)
        except DeliveryBookError as exc:
            logger.info("Rejected %r: %s", command_text, exc)
            raise

        if self.db_path is not None and isinstance(command, MUTATING_COMMANDS):
            try:
                save_state(self.store, self.db_path)
            except StorageError as exc:
                logger.error("Save failed: %s", exc)
                raise CommandError(str(exc)) from exc
        return result

    def filtered(self, kind: EntityKind) -> list[Entity]:
        return self.store.filtered(kind)
