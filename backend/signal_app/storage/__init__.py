"""Trade storage backends."""

from signal_app.storage.memory_repo import InMemoryTradeRepository

__all__ = ["InMemoryTradeRepository"]
