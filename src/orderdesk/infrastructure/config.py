"""Runtime settings read from ``ORDERDESK_*`` environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from orderdesk.domain.model.value_objects import DEFAULT_CURRENCY
from orderdesk.infrastructure.event_stream import DEFAULT_BUFFER_SIZE

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

STORAGE_BACKENDS = ("json", "memory")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    currency: str = DEFAULT_CURRENCY
    storage: str = "json"
    stream_buffer: int = DEFAULT_BUFFER_SIZE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from the environment, falling back to defaults.

        Raises ValueError for values that cannot be used.
        """
        env = os.environ if environ is None else environ

        storage = env.get("ORDERDESK_STORAGE", "json").strip().lower()
        if storage not in STORAGE_BACKENDS:
            raise ValueError(
                f"ORDERDESK_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, "
                f"got {storage!r}"
            )

        currency = env.get("ORDERDESK_CURRENCY", DEFAULT_CURRENCY).strip().upper()
        if not currency:
            raise ValueError("ORDERDESK_CURRENCY cannot be empty")

        raw_buffer = env.get("ORDERDESK_STREAM_BUFFER", str(DEFAULT_BUFFER_SIZE))
        try:
            stream_buffer = int(raw_buffer)
        except ValueError:
            raise ValueError(
                f"ORDERDESK_STREAM_BUFFER must be an integer, got {raw_buffer!r}"
            ) from None
        if stream_buffer <= 0:
            raise ValueError("ORDERDESK_STREAM_BUFFER must be positive")

        log_level = env.get("ORDERDESK_LOG_LEVEL", "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Unknown ORDERDESK_LOG_LEVEL {log_level!r}")

        data_dir = env.get("ORDERDESK_DATA_DIR")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
            currency=currency,
            storage=storage,
            stream_buffer=stream_buffer,
            log_level=log_level,
        )
