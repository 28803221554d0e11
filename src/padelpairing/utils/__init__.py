"""Shared helpers: logger setup and identifier generation."""

# Padel Pairing
# Copyright (C) 2025  Padel Pairing developers
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
import os
import uuid
from typing import Optional

from padelpairing.constants import LOG_FORMAT, LOG_LEVEL_ENV_VAR

_ROOT_LOGGER_NAME = "padelpairing"


def _configure_root_logger() -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if root.handlers:
        return root

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    level = logging.getLevelName(level_name)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger that propagates to the package logger.

    The package logger is configured once with a stream handler; its level
    comes from the ``PADELPAIRING_LOG_LEVEL`` environment variable.
    """
    _configure_root_logger()
    if name != _ROOT_LOGGER_NAME and not name.startswith(_ROOT_LOGGER_NAME + "."):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Change the level of every Padel Pairing logger."""
    _configure_root_logger().setLevel(level)


def generate_id(prefix: Optional[str] = None) -> str:
    """Generate a unique identifier, optionally prefixed (e.g. ``Player_1a2b...``)."""
    token = uuid.uuid4().hex[:16]
    if prefix:
        return f"{prefix}_{token}"
    return token
