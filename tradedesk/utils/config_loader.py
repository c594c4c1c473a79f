# tradedesk/utils/config_loader.py
"""
Load the YAML application config.

Placeholders of the form ``${NAME}`` or ``${NAME:fallback}`` are expanded
from the environment before parsing. An unset variable without a fallback
is left in place, so the section validators report it.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..models.config import AppConfig


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/config.yaml"
CONFIG_PATH_ENV = "TRADEDESK_CONFIG"

_PLACEHOLDER = re.compile(r'\$\{(?P<name>[^}:]+)(?::(?P<fallback>[^}]*))?\}')


def substitute_env_vars(text: str) -> str:
    """Expand ``${NAME}`` and ``${NAME:fallback}`` placeholders in ``text``."""

    def expand(match: re.Match) -> str:
        value = os.getenv(match.group('name'))
        if value is not None:
            return value
        fallback = match.group('fallback')
        return fallback if fallback is not None else match.group(0)

    return _PLACEHOLDER.sub(expand, text)


def resolve_config_path(config_path: Optional[str] = None) -> Optional[Path]:
    """
    Pick the file to load.

    An explicit argument wins, then ``$TRADEDESK_CONFIG``, then
    ``configs/config.yaml`` when it exists. Returns None when no file
    applies and built-in defaults should be used.

    Raises:
        FileNotFoundError: If an explicitly requested file is missing
    """
    requested = config_path or os.getenv(CONFIG_PATH_ENV)
    if requested:
        path = Path(requested)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {requested}")
        return path

    default_path = Path(DEFAULT_CONFIG_PATH)
    return default_path if default_path.is_file() else None


def read_config_mapping(path: Path) -> Dict[str, Any]:
    """
    Parse a config file into a plain mapping; an empty file gives ``{}``.

    Raises:
        ValueError: If the file is not YAML or its top level is not a mapping
    """
    text = substitute_env_vars(path.read_text(encoding='utf-8'))
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of config sections")
    return data


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Build the AppConfig for this process.

    Raises:
        FileNotFoundError: If an explicitly requested file is missing
        ValueError: If the file is not valid YAML
        pydantic.ValidationError: If a section fails validation
    """
    path = resolve_config_path(config_path)
    if path is None:
        logger.debug("No config file found, using built-in defaults")
        return AppConfig()

    logger.debug(f"Loading config from {path}")
    return AppConfig.from_dict(read_config_mapping(path))


def save_config(config: AppConfig, config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write ``config`` as YAML, creating parent directories."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(config.model_dump(mode='json'), default_flow_style=False, sort_keys=False),
        encoding='utf-8',
    )
