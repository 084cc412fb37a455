"""Shared helpers: logging setup and identifier generation."""

# Matchday
# Copyright (C) 2025  Matchday developers
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
import sys
import uuid
from datetime import datetime, timezone

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_root_configured = False


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a module logger, configuring the package root logger once.

    Args:
        name: Logger name, normally ``__name__`` of the calling module
        level: Level applied to the package root logger on first use

    Returns:
        The configured logger
    """
    global _root_configured
    if not _root_configured:
        root = logging.getLogger("matchday")
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)
        root.setLevel(level)
        _root_configured = True
    return logging.getLogger(name)


def generate_id(prefix: str) -> str:
    """Generate a unique identifier such as ``match_3f2a...``."""
    return f"{prefix}_{uuid.uuid4().hex}"


def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()
