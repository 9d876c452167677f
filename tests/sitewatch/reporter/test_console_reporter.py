"""
Unit tests for the ConsoleReporter and its formatting helpers.
"""

import io
from datetime import datetime, timezone

import pytest

from sitewatch.domain import FailureKind, Outcome, RoundSummary, UrlSnapshot
from sitewatch.reporter.console_reporter import ConsoleReporter, format_aggregate, format_round

TIMESTAMP = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
TIMESTAMP_MS = int(TIMESTAMP.timestamp() * 1000)


@pytest.fixture
def outcomes():
    return [
        Outcome.success("https://a.example", 200, 0.123, timestamp=TIMESTAMP),
        Outcome.failure(
            "https://b.example", FailureKind.TRANSPORT, "transport error: refused", 0.5, timestamp=TIMESTAMP
        ),
    ]


def test_format_round_should_render_table_and_stats(outcomes) -> None:
    # Arrange
    summary = RoundSummary(count=2, successes=1, uptime_pct=50.0, avg_latency=0.3115)

    # Act
    text = format_round(outcomes, summary)

    # Assert
    lines = text.splitlines()
    assert "Results (2 checks):" in lines
    assert f"{'1':<5} | {'200':<8} | {'123':<7} | {TIMESTAMP_MS:<13} | https://a.example" in lines
    assert f"{'2':<5} | {'ERR':<8} | {'500':<7} | {TIMESTAMP_MS:<13} | https://b.example" in lines
    assert "        -> error: transport error: refused" in lines
    assert lines[-1] == "Round stats: avg=311ms, uptime=50.00% (1/2)"


def test_format_round_should_show_status_code_next_to_error() -> None:
    outcome = Outcome.failure(
        "https://c.example", FailureKind.MISSING_HEADER, "missing header X-Env", 0.01, timestamp=TIMESTAMP
    )._replace(status_code=200)

    text = format_round([outcome], RoundSummary(1, 1, 100.0, 0.01))

    assert "| 200      |" in text
    assert "-> error: missing header X-Env" in text


def test_format_aggregate_should_render_one_line_per_url() -> None:
    snapshots = [
        UrlSnapshot("https://a.example", samples=4, uptime_pct=75.0, avg_latency=0.02),
        UrlSnapshot("https://b.example", samples=4, uptime_pct=100.0, avg_latency=0.1),
    ]

    text = format_aggregate(snapshots)

    lines = text.splitlines()
    assert lines[1] == "Aggregate statistics:"
    assert lines[-2] == f"{4:<7} | {75.0:<7.2f} | {20:<7} | https://a.example"
    assert lines[-1] == f"{4:<7} | {100.0:<7.2f} | {100:<7} | https://b.example"


@pytest.mark.asyncio
async def test_console_reporter_should_write_to_stream(outcomes) -> None:
    # Arrange
    stream = io.StringIO()
    reporter = ConsoleReporter(stream)

    # Act
    await reporter.report_round(outcomes, RoundSummary(2, 1, 50.0, 0.3))
    await reporter.report_aggregate([UrlSnapshot("https://a.example", 1, 100.0, 0.1)])

    # Assert
    output = stream.getvalue()
    assert "Results (2 checks):" in output
    assert "Aggregate statistics:" in output
    assert output.endswith("https://a.example\n")


@pytest.mark.asyncio
async def test_console_reporter_should_default_to_stdout(outcomes, capsys: pytest.CaptureFixture) -> None:
    await ConsoleReporter().report_round(outcomes, RoundSummary(2, 1, 50.0, 0.3))

    assert "Round stats: avg=300ms, uptime=50.00% (1/2)" in capsys.readouterr().out
