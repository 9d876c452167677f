"""
Constants for the website health checker.

This module defines default values for all configurable parameters.
These constants are used as fallback values when neither command-line
arguments nor environment variables are provided.
"""

# Check configuration defaults
DEFAULT_WORKERS = 50
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_RETRIES = 0
DEFAULT_PERIOD = 0

# Fixed wait between retries of a transport failure, in seconds
DEFAULT_RETRY_BACKOFF = 0.2

# How often a sleeping periodic scheduler checks for shutdown, in seconds
DEFAULT_SHUTDOWN_POLL_INTERVAL = 0.1

# Instance configuration defaults
DEFAULT_INSTANCE_ID_PREFIX = "sitewatch-"

# Logging configuration defaults
DEFAULT_LOGGING_TYPE = "prod"
DEFAULT_LOGGING_CONFIG_FILE = ""
