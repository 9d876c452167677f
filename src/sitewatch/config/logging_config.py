"""
Logging setup for sitewatch.

Logging is configured from a dictConfig JSON file: one of the two profiles
packaged next to this module ('dev', 'prod') or a user-supplied file
('custom'). Every record reaching a root handler is stamped with the
instance ID so formatters can reference %(instance_id)s.
"""

import json
import logging.config
import os
from typing import Any, Dict

from sitewatch.config.monitoring_context import MonitoringContext

# Logging types served by the JSON profiles shipped with the package.
_BUILTIN_CONFIGS: Dict[str, str] = {
    "dev": "logging-config-dev.json",
    "prod": "logging-config-prod.json",
}


def configure_logging(context: MonitoringContext) -> None:
    """
    Applies the logging configuration selected by the context.

    Args:
        context: Provides the logging type ('dev', 'prod' or 'custom', case
            insensitive), the custom file path and the instance ID.

    Raises:
        ValueError: If the logging type is empty or unknown, or 'custom' is
            selected without a configuration file.
        RuntimeError: If the selected file cannot be loaded.
    """
    _load_logging_config(_resolve_config_file(context))
    _stamp_instance_id(context.instance_id)
    logging.debug("Logging configured and InstanceIdFilter added.")


def _resolve_config_file(context: MonitoringContext) -> str:
    """Returns the path of the dictConfig file for the context's logging type."""
    logging_type: str = context.logging_type.lower()
    if not logging_type:
        raise ValueError("Logging type must be provided.")

    builtin = _BUILTIN_CONFIGS.get(logging_type)
    if builtin is not None:
        return _get_local_package_file_path(builtin)

    if logging_type != "custom":
        allowed = ", ".join([*_BUILTIN_CONFIGS, "custom"])
        raise ValueError(f"Invalid logging type: {context.logging_type}. Allowed values are: {allowed}")
    if not context.logging_config_file:
        raise ValueError("Custom logging configuration file must be provided.")
    return context.logging_config_file


def _stamp_instance_id(instance_id: str) -> None:
    # Logger filters skip records propagated from child loggers, handler filters do not.
    root_logger = logging.getLogger()
    instance_filter = _InstanceIdFilter(instance_id=instance_id)
    root_logger.addFilter(instance_filter)
    for handler in root_logger.handlers:
        handler.addFilter(instance_filter)


def _load_logging_config(config_file: str) -> None:
    """
    Reads a JSON dictConfig file and applies it.

    Raises:
        RuntimeError: If the file is missing or unreadable, is not valid JSON,
            or is rejected by logging.config.dictConfig.
    """
    try:
        with open(config_file) as f:
            config: Dict[str, Any] = json.load(f)
    except FileNotFoundError as err:
        raise RuntimeError(f"Logging config file not found: {config_file}") from err
    except json.JSONDecodeError as err:
        raise RuntimeError(f"Invalid JSON format in logging config file: {config_file}") from err
    except OSError as err:
        raise RuntimeError(f"Cannot read logging config file {config_file}: {err}") from err

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as err:
        raise RuntimeError(f"Error loading logging config: {err}") from err


def _get_local_package_file_path(config_file: str) -> str:
    return os.path.join(os.path.dirname(__file__), config_file)


class _InstanceIdFilter(logging.Filter):
    """Sets 'instance_id' on every record it sees and lets the record through."""

    def __init__(self, instance_id: str) -> None:
        super().__init__()
        self._instance_id: str = instance_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.instance_id = self._instance_id
        return True
