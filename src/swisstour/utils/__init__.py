"""Shared helpers for Swisstour: logging setup, id generation and sorting."""

# Swisstour
# Copyright (C) 2025  Swisstour developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import re
import uuid
from typing import Any, List, Union

LOGGER_ROOT = "swisstour"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_NATURAL_CHUNK = re.compile(r"(\d+)")


def setup_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``.

    The package root logger gets a ``NullHandler`` so library use stays
    silent until the application configures logging (see
    :func:`configure_logging`).
    """
    root = logging.getLogger(LOGGER_ROOT)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """Attach a stream handler to the package logger (CLI use only)."""
    root = logging.getLogger(LOGGER_ROOT)
    level = logging.DEBUG if verbose else logging.INFO
    for handler in root.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(level)
            root.setLevel(level)
            return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    root.addHandler(handler)
    root.setLevel(level)


def generate_id(prefix: str = "") -> str:
    """Generate a unique identifier, optionally prefixed (``Match-<uuid>``)."""
    value = str(uuid.uuid4())
    return f"{prefix}-{value}" if prefix else value


def natural_sort_key(value: str) -> List[Union[int, str]]:
    """Sort key that orders embedded numbers numerically.

    ``"round-2"`` sorts before ``"round-10"``.
    """
    return [
        int(chunk) if chunk.isdigit() else chunk.lower()
        for chunk in _NATURAL_CHUNK.split(value)
    ]


def to_number(value: Any) -> float:
    """Numeric value of a stat; missing or unconvertible values count as 0."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
