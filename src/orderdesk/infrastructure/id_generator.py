"""Random id generator backed by the ``secrets`` module."""

from __future__ import annotations

import secrets
import string

from orderdesk.domain.service.id_generator import IdGenerator

_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 10
_PRODUCT_ID_LENGTH = 6


class RandomIdGenerator(IdGenerator):

    def id(self) -> str:
        return "".join(secrets.choice(_ALPHABET) for _ in range(_ID_LENGTH))

    def product_id(self) -> str:
        return "".join(secrets.choice(string.digits) for _ in range(_PRODUCT_ID_LENGTH))
