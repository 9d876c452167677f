"""
Configuration module for the website health checker.

This module parses command-line arguments and environment variables into a
MonitoringContext. It defines default values and help text for all
configurable parameters and validates the resulting check configuration
before any round is started.
"""

import argparse
import os
import uuid
from typing import Any, Iterable, List, Optional, Sequence

from sitewatch.config.constants import (
    DEFAULT_INSTANCE_ID_PREFIX,
    DEFAULT_LOGGING_CONFIG_FILE,
    DEFAULT_LOGGING_TYPE,
    DEFAULT_PERIOD,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_WORKERS,
)
from sitewatch.config.monitoring_context import MonitoringContext
from sitewatch.config.url_source import load_urls_from_file
from sitewatch.domain import CheckConfig, HeaderCheck
from sitewatch.errors import ConfigurationError

EPILOG = """examples:
  sitewatch --workers 50 --timeout-ms 5000 https://example.org https://httpbin.org/status/500
  sitewatch --period 10 --retries 1 --header 'Content-Type=text/plain' --file urls.txt
"""


def parse_header_check(value: str) -> HeaderCheck:
    """
    Parse a 'NAME=VALUE' header requirement.

    The text is split on the first '='. Both sides are trimmed; the value may
    be empty, the name may not.

    Args:
        value: The requirement as given on the command line.

    Returns:
        HeaderCheck: The parsed requirement.

    Raises:
        ConfigurationError: If there is no '=' or the name is empty.
    """
    name, separator, expected = value.partition("=")
    if not separator:
        raise ConfigurationError(f"--header: missing value in '{value}', expected KEY=VALUE")
    name = name.strip()
    if not name:
        raise ConfigurationError(f"--header: empty key in '{value}'")
    return HeaderCheck(name=name, expected=expected.strip())


def build_check_config(
    urls: Sequence[str],
    workers: int = DEFAULT_WORKERS,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    retries: int = DEFAULT_RETRIES,
    period: float = DEFAULT_PERIOD,
    headers: Iterable[str] = (),
    url_files: Iterable[str] = (),
) -> CheckConfig:
    """
    Validate raw settings and assemble a CheckConfig.

    URLs read from files are appended after the given URLs. The worker count
    is floored at 1 and capped at the number of URLs.

    Args:
        urls: URLs given directly.
        workers: Requested number of concurrent workers.
        timeout_ms: Per-attempt timeout in milliseconds.
        retries: Extra attempts allowed after a transport error.
        period: Seconds between rounds; 0 for a single run.
        headers: Header requirements as 'NAME=VALUE' strings.
        url_files: Paths of files listing additional URLs.

    Returns:
        CheckConfig: The validated configuration.

    Raises:
        ConfigurationError: If any setting is invalid or no URL is provided.
    """
    if timeout_ms <= 0:
        raise ConfigurationError(f"invalid --timeout-ms value: {timeout_ms}")
    if retries < 0:
        raise ConfigurationError(f"invalid --retries value: {retries}")
    if period < 0:
        raise ConfigurationError(f"invalid --period value: {period}")

    all_urls: List[str] = [url for url in urls if url.strip()]
    for path in url_files:
        all_urls.extend(load_urls_from_file(path))
    if not all_urls:
        raise ConfigurationError("no URLs provided. Pass them as args or with --file path")

    header_checks = tuple(parse_header_check(header) for header in headers)

    return CheckConfig(
        workers=max(1, min(workers, len(all_urls))),
        timeout=timeout_ms / 1000,
        retries=retries,
        header_checks=header_checks,
        urls=tuple(all_urls),
        period=period,
    )


def get_context(argv: Optional[Sequence[str]] = None) -> MonitoringContext:
    """
    Parse command-line arguments and environment variables to create a configuration context.

    For each option, it first checks for a command-line argument, then falls
    back to an environment variable, and finally uses a default value.
    Invalid settings end the program with a usage message (exit status 2).

    Args:
        argv: The arguments to parse. Defaults to sys.argv[1:].

    Returns:
        MonitoringContext: A configuration context object containing all parsed settings.
    """
    parser = argparse.ArgumentParser(
        prog="sitewatch",
        description="Concurrent website status checker with header validation and uptime statistics.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "urls",
        nargs="*",
        metavar="URL",
        help="URLs to check. Can be combined with --file.",
    )

    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=os.getenv("SITEWATCH_WORKERS", str(DEFAULT_WORKERS)),
        help="Number of concurrent workers.\n"
        "If not provided, the value is read from the SITEWATCH_WORKERS environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_WORKERS} is used.",
    )

    parser.add_argument(
        "-t",
        "--timeout-ms",
        type=int,
        default=os.getenv("SITEWATCH_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)),
        help="Request timeout in milliseconds, per attempt.\n"
        "If not provided, the value is read from the SITEWATCH_TIMEOUT_MS environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_TIMEOUT_MS} is used.",
    )

    parser.add_argument(
        "-r",
        "--retries",
        type=int,
        default=os.getenv("SITEWATCH_RETRIES", str(DEFAULT_RETRIES)),
        help="Max retries per website on transport errors.\n"
        "If not provided, the value is read from the SITEWATCH_RETRIES environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_RETRIES} is used.",
    )

    parser.add_argument(
        "-p",
        "--period",
        type=float,
        default=os.getenv("SITEWATCH_PERIOD", str(DEFAULT_PERIOD)),
        help="Periodic monitoring interval in seconds (0 = single run).\n"
        "If not provided, the value is read from the SITEWATCH_PERIOD environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_PERIOD} is used.",
    )

    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        default=[],
        metavar="K=V",
        help="Require the exact HTTP header K=V. Repeatable.",
    )

    parser.add_argument(
        "-f",
        "--file",
        dest="files",
        action="append",
        default=[],
        metavar="PATH",
        help="Read URLs (one per line, '#' for comments) from PATH. Repeatable.",
    )

    parser.add_argument(
        "-iid",
        "--instance-id",
        type=str,
        default=os.getenv(
            "SITEWATCH_INSTANCE_ID", f"{DEFAULT_INSTANCE_ID_PREFIX}{uuid.uuid4()}"
        ),
        help="Identifier attached to every log record.\n"
        "If not provided, the value is read from the SITEWATCH_INSTANCE_ID environment variable.\n"
        f"If that is also absent, the default value will be {DEFAULT_INSTANCE_ID_PREFIX}uuid4().",
    )

    parser.add_argument(
        "-lt",
        "--logging-type",
        type=str,
        default=os.getenv("SITEWATCH_LOGGING_TYPE", DEFAULT_LOGGING_TYPE),
        help="Specifies the logging configuration type to use.\n"
        "Allowed values: dev, prod, custom (case insensitive).\n"
        "For 'dev' and 'prod', system will use built-in configurations.\n"
        "For 'custom', the --logging-config-file argument is required.",
    )

    parser.add_argument(
        "-lcf",
        "--logging-config-file",
        type=str,
        default=os.getenv("SITEWATCH_LOGGING_CONFIG_FILE", DEFAULT_LOGGING_CONFIG_FILE),
        help="Path to custom logging configuration file.\n"
        "Required when --logging-type is set to 'custom'.",
    )

    # Parse the command-line arguments
    args: Any = parser.parse_args(argv)

    try:
        check_config = build_check_config(
            urls=args.urls,
            workers=args.workers,
            timeout_ms=args.timeout_ms,
            retries=args.retries,
            period=args.period,
            headers=args.headers,
            url_files=args.files,
        )
    except ConfigurationError as err:
        parser.error(str(err))

    # Create and return a MonitoringContext with the parsed settings
    return MonitoringContext(
        instance_id=args.instance_id,
        logging_type=args.logging_type,
        logging_config_file=args.logging_config_file,
        check_config=check_config,
    )
