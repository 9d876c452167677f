"""
Main entry point for the website health checker.

This module parses the configuration, sets up logging, and runs either a
single round or a periodic monitoring loop that stops on ENTER, SIGINT or
SIGTERM and prints the aggregated statistics.
"""

import asyncio
import logging
import sys
from typing import Optional, Sequence

from sitewatch.config import MonitoringContext, get_context
from sitewatch.config.logging_config import configure_logging
from sitewatch.contracts import Reporter
from sitewatch.domain import CheckConfig
from sitewatch.errors import IncompleteRoundError
from sitewatch.reporter.console_reporter import ConsoleReporter
from sitewatch.reporter.delegating_reporter import DelegatingReporter
from sitewatch.reporter.failure_log_reporter import FailureLogReporter
from sitewatch.runner import RoundRunner
from sitewatch.scheduler.periodic_scheduler import PeriodicScheduler
from sitewatch.shutdown import ShutdownSignal, install_signal_handlers, start_stdin_watcher
from sitewatch.statistics import summarize_round


async def run_single(config: CheckConfig, runner: RoundRunner, reporter: Reporter) -> int:
    """
    Run one round and report it.

    Returns:
        int: The process exit status.
    """
    logger: logging.Logger = logging.getLogger(__name__)
    try:
        outcomes = await runner.run_round(config)
    except IncompleteRoundError as e:
        logger.error(str(e))
        await reporter.report_round(e.outcomes, summarize_round(e.outcomes))
        return 1

    await reporter.report_round(outcomes, summarize_round(outcomes))
    return 0


async def run_periodic(
    config: CheckConfig,
    runner: RoundRunner,
    reporter: Reporter,
    shutdown: Optional[ShutdownSignal] = None,
) -> int:
    """
    Run rounds every config.period seconds until a stop trigger fires.

    Returns:
        int: The process exit status.
    """
    logger: logging.Logger = logging.getLogger(__name__)
    shutdown = shutdown or ShutdownSignal()

    install_signal_handlers(shutdown)
    if sys.stdin is not None and sys.stdin.isatty():
        start_stdin_watcher(shutdown)
        logger.info(f"Periodic monitoring every {config.period}s. Press ENTER to stop...")
    else:
        logger.info(f"Periodic monitoring every {config.period}s. Send SIGINT or SIGTERM to stop...")

    scheduler = PeriodicScheduler(
        config=config, runner=runner, reporter=reporter, shutdown=shutdown
    )
    await scheduler.run()
    return 0


async def main(context: MonitoringContext) -> int:
    """
    Set up and run the website health checker.

    Args:
        context: Configuration context containing all application settings.

    Returns:
        int: The process exit status.
    """
    logger: logging.Logger = logging.getLogger(__name__)
    config: CheckConfig = context.check_config
    logger.info(
        f"Checking {len(config.urls)} URLs with {config.workers} workers "
        f"(timeout {config.timeout}s, retries {config.retries})."
    )

    runner = RoundRunner()
    reporter = DelegatingReporter([ConsoleReporter(), FailureLogReporter()])

    if config.is_periodic:
        return await run_periodic(config, runner, reporter)
    return await run_single(config, runner, reporter)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Console script entry point.

    Args:
        argv: Command-line arguments. Defaults to sys.argv[1:].

    Returns:
        int: The process exit status.
    """
    # Parse command-line arguments and environment variables
    context: MonitoringContext = get_context(argv)

    # Configure logging based on the context
    configure_logging(context)

    try:
        return asyncio.run(main(context))
    except KeyboardInterrupt:
        logging.info("Shutdown initiated by user (Ctrl+C).")
        return 130


if __name__ == "__main__":
    sys.exit(run())
