"""Shared logging helpers for meshwire."""

from __future__ import annotations

import logging
from typing import Union


def configure_logging(*, level: Union[int, str] = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Mirrors ``logging.basicConfig`` with a terse format suitable for CLI output.
    Pass ``force=True`` to reconfigure during tests or specialised entry points.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
