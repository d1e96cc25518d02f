"""
Ledger error hierarchy.

Validation errors are raised before any store command runs.
Store errors wrap whatever the backing database raised, keeping
the command name so logs point at the failing step.
"""


class LedgerError(Exception):
    """Base class for every error raised by the ledger."""


class LedgerValidationError(LedgerError, ValueError):
    """The caller asked for something the ledger refuses to do."""


class EntityNotFoundError(LedgerValidationError):
    """No entity with the given id exists in the store."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} {entity_id} not found")


class StoreError(LedgerError):
    """A store command failed."""

    def __init__(self, command: str, message: str):
        self.command = command
        self.message = message
        super().__init__(f"{command} failed: {message}")
