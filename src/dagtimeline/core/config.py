# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Client config loading with dagtimeline.yaml discovery.

This module provides:
- find_config_file(): Locate dagtimeline.yaml near the working directory
- apply_env_overrides(): Let DAGTIMELINE_* environment variables win over the file
- load_client_config(): Load, override and validate, return a typed ClientConfig
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .schema import ClientConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "dagtimeline.yaml"

# Environment variable -> config key
ENV_OVERRIDES = {
    "DAGTIMELINE_TIMELINE_ADDRESS": "timeline_address",
    "DAGTIMELINE_TIMELINE_HTTPS_ADDRESS": "timeline_https_address",
    "DAGTIMELINE_USE_HTTPS": "use_https",
    "DAGTIMELINE_RESOURCEMANAGER_ADDRESS": "resourcemanager_address",
}


def find_config_file() -> Path | None:
    """
    Find dagtimeline.yaml if it exists.

    Searches:
    1. Current working directory
    2. Parent directories up to 2 levels

    Returns None if no file is found.
    """
    search_paths = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.cwd().parent / CONFIG_FILE_NAME,
        Path.cwd().parent.parent / CONFIG_FILE_NAME,
    ]

    for path in search_paths:
        if path.exists():
            return path
    return None


def apply_env_overrides(raw_config: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Return a copy of raw_config with DAGTIMELINE_* variables applied."""
    if environ is None:
        environ = dict(os.environ)

    config = dict(raw_config)
    for env_name, key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        config[key] = value
        logger.debug(f"Applied {env_name} -> {key}")
    return config


def load_client_config(path: Path | str | None = None, environ: dict[str, str] | None = None) -> ClientConfig:
    """
    Load and validate client config.

    Args:
        path: Explicit YAML file. When omitted, dagtimeline.yaml is searched
            for and defaults are used if none exists.
        environ: Environment to read overrides from (default: os.environ)

    Returns:
        ClientConfig frozen dataclass

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        ValueError: If config validation fails
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        path = find_config_file()

    raw_config: dict[str, Any] = {}
    if path is None:
        logger.debug(f"No {CONFIG_FILE_NAME} found - using defaults")
    else:
        with open(path) as f:
            raw_config = yaml.safe_load(f) or {}
        if not isinstance(raw_config, dict):
            raise ValueError(f"Invalid config in {path}: expected a mapping")

    resolved_config = apply_env_overrides(raw_config, environ)

    try:
        config = ClientConfig.Schema().load(resolved_config)
    except Exception as e:
        raise ValueError(f"Invalid config in {path or 'environment'}: {e}") from e

    assert isinstance(config, ClientConfig)
    logger.debug(f"Loaded client config: timeline at {config.active_timeline_address}")
    return config
