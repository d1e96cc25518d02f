"""Balance ledger and history for a repair shop's clients, suppliers, and stock."""

__version__ = "0.1.0"
