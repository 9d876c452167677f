"""
Unit tests for the configuration module's initialization.

This module contains tests for the configuration module, ensuring that it
parses header requirements, assembles a validated CheckConfig and builds a
MonitoringContext from command-line arguments and environment variables.

The tests follow the Arrange-Act-Assert (AAA) pattern.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from sitewatch.config import build_check_config, get_context, parse_header_check
from sitewatch.config.monitoring_context import MonitoringContext
from sitewatch.domain import HeaderCheck
from sitewatch.errors import ConfigurationError

ENV_VARS = (
    "SITEWATCH_WORKERS",
    "SITEWATCH_TIMEOUT_MS",
    "SITEWATCH_RETRIES",
    "SITEWATCH_PERIOD",
    "SITEWATCH_INSTANCE_ID",
    "SITEWATCH_LOGGING_TYPE",
    "SITEWATCH_LOGGING_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Removes any SITEWATCH_* variable inherited from the calling shell."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def url_file(tmp_path: Path) -> Path:
    path = tmp_path / "urls.txt"
    path.write_text("# staging\nhttps://file-a.example\n\n  https://file-b.example  \n")
    return path


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Content-Type=text/plain", HeaderCheck("Content-Type", "text/plain")),
        (" X-Env = prod ", HeaderCheck("X-Env", "prod")),
        ("X-Empty=", HeaderCheck("X-Empty", "")),
        ("X-Token=a=b", HeaderCheck("X-Token", "a=b")),
    ],
)
def test_parse_header_check_should_split_on_first_equals(value: str, expected: HeaderCheck) -> None:
    assert parse_header_check(value) == expected


def test_parse_header_check_should_reject_missing_separator() -> None:
    with pytest.raises(ConfigurationError, match="missing value"):
        parse_header_check("Content-Type")


def test_parse_header_check_should_reject_empty_name() -> None:
    with pytest.raises(ConfigurationError, match="empty key"):
        parse_header_check(" =text/plain")


def test_build_check_config_should_convert_and_clamp_settings() -> None:
    # Act
    config = build_check_config(
        urls=["https://a.example", "https://b.example"],
        workers=50,
        timeout_ms=1500,
        retries=2,
        period=10,
        headers=["Content-Type=text/plain"],
    )

    # Assert
    assert config.workers == 2
    assert config.timeout == 1.5
    assert config.retries == 2
    assert config.period == 10
    assert config.is_periodic
    assert config.header_checks == (HeaderCheck("Content-Type", "text/plain"),)
    assert config.urls == ("https://a.example", "https://b.example")


def test_build_check_config_should_floor_workers_at_one() -> None:
    config = build_check_config(urls=["https://a.example"], workers=0)

    assert config.workers == 1
    assert not config.is_periodic


def test_build_check_config_should_append_urls_from_files(url_file: Path) -> None:
    config = build_check_config(urls=["https://direct.example"], url_files=[str(url_file)])

    assert config.urls == (
        "https://direct.example",
        "https://file-a.example",
        "https://file-b.example",
    )


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"timeout_ms": 0}, "--timeout-ms"),
        ({"retries": -1}, "--retries"),
        ({"period": -5}, "--period"),
        ({"urls": []}, "no URLs provided"),
        ({"urls": ["   "]}, "no URLs provided"),
        ({"headers": ["broken"]}, "--header"),
    ],
)
def test_build_check_config_should_reject_invalid_settings(overrides, message: str) -> None:
    settings = dict(urls=["https://a.example"])
    settings.update(overrides)

    with pytest.raises(ConfigurationError, match=message):
        build_check_config(**settings)


def test_build_check_config_should_report_unreadable_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="failed to read"):
        build_check_config(urls=[], url_files=[str(tmp_path / "missing.txt")])


def test_get_context_should_return_context_with_default_values() -> None:
    """
    Tests that get_context falls back to the defaults when only URLs are given.
    """
    # Arrange
    with patch("uuid.uuid4", return_value="mock-uuid"):
        # Act
        context = get_context(["https://a.example"])

    # Assert
    assert isinstance(context, MonitoringContext)
    assert context.instance_id == "sitewatch-mock-uuid"
    assert context.logging_type == "prod"
    assert context.logging_config_file == ""
    config = context.check_config
    assert config.workers == 1
    assert config.timeout == 5.0
    assert config.retries == 0
    assert config.period == 0
    assert config.header_checks == ()


def test_get_context_should_use_command_line_arguments(url_file: Path) -> None:
    # Act
    context = get_context(
        [
            "-w", "3",
            "--timeout-ms", "250",
            "-r", "1",
            "--period", "2.5",
            "-H", "Content-Type=text/plain",
            "--header", "X-Env=prod",
            "-f", str(url_file),
            "-iid", "instance-1",
            "-lt", "dev",
            "https://direct.example",
        ]
    )

    # Assert
    assert context.instance_id == "instance-1"
    assert context.logging_type == "dev"
    config = context.check_config
    assert config.workers == 3
    assert config.timeout == 0.25
    assert config.retries == 1
    assert config.period == 2.5
    assert config.header_checks == (
        HeaderCheck("Content-Type", "text/plain"),
        HeaderCheck("X-Env", "prod"),
    )
    assert config.urls[0] == "https://direct.example"
    assert len(config.urls) == 3


def test_get_context_should_use_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Tests that get_context reads settings from the environment when no option is given.
    """
    # Arrange
    monkeypatch.setenv("SITEWATCH_WORKERS", "2")
    monkeypatch.setenv("SITEWATCH_TIMEOUT_MS", "750")
    monkeypatch.setenv("SITEWATCH_RETRIES", "3")
    monkeypatch.setenv("SITEWATCH_PERIOD", "15")
    monkeypatch.setenv("SITEWATCH_INSTANCE_ID", "env-instance")
    monkeypatch.setenv("SITEWATCH_LOGGING_TYPE", "custom")
    monkeypatch.setenv("SITEWATCH_LOGGING_CONFIG_FILE", "/env/logging.json")

    # Act
    context = get_context(["https://a.example", "https://b.example", "https://c.example"])

    # Assert
    assert context.instance_id == "env-instance"
    assert context.logging_type == "custom"
    assert context.logging_config_file == "/env/logging.json"
    config = context.check_config
    assert config.workers == 2
    assert config.timeout == 0.75
    assert config.retries == 3
    assert config.period == 15


def test_get_context_should_prefer_arguments_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SITEWATCH_RETRIES", "3")

    context = get_context(["--retries", "1", "https://a.example"])

    assert context.check_config.retries == 1


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--timeout-ms", "0", "https://a.example"],
        ["--retries", "-1", "https://a.example"],
        ["--header", "no-separator", "https://a.example"],
        ["--workers", "many", "https://a.example"],
    ],
)
def test_get_context_should_exit_with_usage_error(argv, capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc_info:
        get_context(argv)

    assert exc_info.value.code == 2
    assert "usage: sitewatch" in capsys.readouterr().err
