"""
Tests for the entry point of the website health checker.

The single-run path is exercised end to end against the local test server;
the periodic path and the console script are tested with the round runner
and the logging setup replaced.
"""

import io
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from fakes import FakeHttpClient
from sitewatch.__main__ import main, run, run_periodic, run_single
from sitewatch.config.monitoring_context import MonitoringContext
from sitewatch.contracts import Reporter
from sitewatch.domain import Outcome
from sitewatch.errors import IncompleteRoundError
from sitewatch.reporter.console_reporter import ConsoleReporter
from sitewatch.runner import RoundRunner
from sitewatch.shutdown import ShutdownSignal


def _context(check_config) -> MonitoringContext:
    return MonitoringContext(
        instance_id="test-instance",
        logging_type="dev",
        logging_config_file="",
        check_config=check_config,
    )


@pytest.mark.asyncio
async def test_run_single_should_report_live_round(http_server, make_config) -> None:
    # Arrange
    stream = io.StringIO()
    config = make_config(
        urls=[str(http_server.make_url("/ok")), str(http_server.make_url("/err"))],
        header_checks=[("Content-Type", "text/plain")],
    )

    # Act
    exit_code = await run_single(config, RoundRunner(), ConsoleReporter(stream))

    # Assert
    assert exit_code == 0
    output = stream.getvalue()
    assert "Results (2 checks):" in output
    assert "| 503      |" in output
    assert "uptime=50.00% (1/2)" in output


@pytest.mark.asyncio
async def test_run_single_should_report_partial_round_and_fail(make_config) -> None:
    # Arrange
    partial = [Outcome.success("https://a.example", 200, 0.01)]
    runner = AsyncMock(spec=RoundRunner)
    runner.run_round.side_effect = IncompleteRoundError(2, partial)
    reporter = AsyncMock(spec=Reporter)

    # Act
    exit_code = await run_single(make_config(), runner, reporter)

    # Assert
    assert exit_code == 1
    reported_outcomes, summary = reporter.report_round.await_args.args
    assert reported_outcomes == partial
    assert summary.count == 1


@pytest.mark.asyncio
async def test_run_periodic_should_stop_on_preset_signal(
    make_config, monkeypatch: pytest.MonkeyPatch
) -> None:
    # Arrange
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    shutdown = ShutdownSignal()
    shutdown.set()
    runner = AsyncMock(spec=RoundRunner)
    reporter = AsyncMock(spec=Reporter)

    # Act
    with patch("sitewatch.__main__.install_signal_handlers") as mock_install:
        exit_code = await run_periodic(make_config(period=5.0), runner, reporter, shutdown)

    # Assert
    assert exit_code == 0
    mock_install.assert_called_once_with(shutdown)
    runner.run_round.assert_not_awaited()
    reporter.report_aggregate.assert_awaited_once_with([])


@pytest.mark.asyncio
async def test_main_should_print_single_round(http_server, make_config, capsys: pytest.CaptureFixture) -> None:
    config = make_config(urls=[str(http_server.make_url("/ok"))])

    exit_code = await main(_context(config))

    assert exit_code == 0
    assert "uptime=100.00% (1/1)" in capsys.readouterr().out


def test_run_should_parse_configure_and_run(capsys: pytest.CaptureFixture) -> None:
    # Arrange
    runner = RoundRunner(client_factory=lambda config: FakeHttpClient())

    with patch("sitewatch.__main__.configure_logging") as mock_configure_logging:
        with patch("sitewatch.__main__.RoundRunner", return_value=runner):
            # Act
            exit_code = run(["--instance-id", "cli-test", "https://a.example", "https://b.example"])

    # Assert
    assert exit_code == 0
    context = mock_configure_logging.call_args.args[0]
    assert context.instance_id == "cli-test"
    assert "Results (2 checks):" in capsys.readouterr().out


def test_run_should_return_130_on_keyboard_interrupt() -> None:
    with patch("sitewatch.__main__.configure_logging"):
        with patch("sitewatch.__main__.main", MagicMock()):
            with patch("asyncio.run", side_effect=KeyboardInterrupt):
                assert run(["https://a.example"]) == 130


def test_run_should_exit_with_usage_error_without_urls() -> None:
    with pytest.raises(SystemExit) as exc_info:
        run([])

    assert exc_info.value.code == 2
