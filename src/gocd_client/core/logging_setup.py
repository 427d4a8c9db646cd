"""Configuración de logging para la CLI."""

from __future__ import annotations

import logging
import sys

from gocd_client.core.config import LogLevel


def setup_logging(level: LogLevel | str) -> None:
    """Configure logging for the CLI (stderr, so stdout stays clean for --json)."""
    value = level.value if isinstance(level, LogLevel) else str(level).upper()
    logging.basicConfig(
        level=value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    # httpx loguea cada request a INFO; solo lo queremos en modo debug.
    logging.getLogger("httpx").setLevel(logging.DEBUG if value == "DEBUG" else logging.WARNING)
