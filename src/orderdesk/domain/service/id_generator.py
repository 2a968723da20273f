"""Abstract id generator.

Aggregates never invent their own identities; the generator is handed
in by the application layer so tests can supply deterministic ids.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IdGenerator(ABC):

    @abstractmethod
    def id(self) -> str:
        """Return a new unique id for an order or order item."""

    @abstractmethod
    def product_id(self) -> str:
        """Return a new product id: exactly six decimal digits."""
