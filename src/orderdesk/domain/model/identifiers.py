"""Identifier value objects.

Each id wraps a non-empty opaque string. Two ids are equal when their
values are equal; the wrapper type keeps an ``OrderItemId`` from being
passed where a ``ProductId`` is expected.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.exceptions import EmptyId


@dataclass(frozen=True)
class _Identifier:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise EmptyId(f"{self._label} cannot be empty")

    @property
    def _label(self) -> str:
        return "ID"

    def equals(self, other: _Identifier) -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OrderId(_Identifier):

    @property
    def _label(self) -> str:
        return "Order ID"


@dataclass(frozen=True)
class OrderItemId(_Identifier):

    @property
    def _label(self) -> str:
        return "Order item ID"


@dataclass(frozen=True)
class ProductId(_Identifier):

    @property
    def _label(self) -> str:
        return "Product ID"
