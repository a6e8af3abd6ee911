# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Logging utilities for dagtimeline.

The client library never configures logging on import. Applications that
want the library's debug output call setup_logging() once at startup.
"""

import logging
import sys


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance under the dagtimeline hierarchy
    """
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    date_format: str | None = None,
) -> None:
    """Configure logging for dagtimeline.

    Sets up the root logger with consistent formatting.

    Args:
        level: Logging level (default: INFO)
        format_string: Custom format string (default: timestamp + level + logger + message)
        date_format: Custom date format (default: ISO-like)
    """
    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    if date_format is None:
        date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # requests logs every connection at DEBUG through urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)
