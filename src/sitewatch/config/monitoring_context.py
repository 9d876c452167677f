"""
Configuration context for the website health checker.

This module defines the data structure that carries the application settings
from the command line to the entry point.
"""

from typing import NamedTuple

from sitewatch.domain import CheckConfig


class MonitoringContext(NamedTuple):
    """
    A data structure containing all configuration parameters of a run.

    This class is immutable. It is created by parsing command-line arguments
    and environment variables.

    Attributes:
        instance_id: Unique identifier of this process, attached to every log record.
        logging_type: Type of logging configuration to use (dev, prod, or custom).
        logging_config_file: Path to custom logging configuration file (if logging_type is 'custom').
        check_config: The validated configuration of the checking engine.
    """

    instance_id: str
    logging_type: str
    logging_config_file: str
    check_config: CheckConfig
