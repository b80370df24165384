"""pytest plugin: harness fixtures and finding reporting.

Registered through the ``pytest11`` entry point. Provides the
``harness_config``, ``api_client`` and ``finding_log`` fixtures, attaches
each test's findings to its report, and prints a findings summary at the
end of the run.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from .client import BookingApiClient
from .config import ConfigError, HarnessConfig, load_config
from .findings import (
    SEVERITY_ICONS,
    AnnotationSink,
    ConsoleSink,
    FindingLog,
    Severity,
    export_findings_json,
)

FINDING_LOG_KEY = pytest.StashKey[FindingLog]()
ANNOTATION_SINK_KEY = pytest.StashKey[AnnotationSink]()

SEVERITY_MARKUP = {
    Severity.CRITICAL: {"red": True, "bold": True},
    Severity.WARNING: {"yellow": True},
    Severity.INFO: {"blue": True},
}


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("bookingprobe", "booking API test harness")
    group.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run against the configured booking service instead of offline",
    )
    group.addoption(
        "--findings-output",
        default=None,
        metavar="PATH",
        help="Write the session's findings to PATH as JSON",
    )
    group.addoption(
        "--bookingprobe-config",
        default=None,
        metavar="PATH",
        help="bookingprobe.yaml to load (default: search working directory)",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "live: needs the real booking service (enable with --run-live)"
    )
    annotations = AnnotationSink()
    config.stash[ANNOTATION_SINK_KEY] = annotations
    config.stash[FINDING_LOG_KEY] = FindingLog(sinks=[ConsoleSink(), annotations])


def get_finding_log(config: pytest.Config) -> FindingLog:
    """The finding log owned by this test session."""
    return config.stash[FINDING_LOG_KEY]


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-live"):
        return
    skip_live = pytest.mark.skip(reason="needs --run-live")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> Iterator[None]:
    outcome = yield
    report = outcome.get_result()

    annotations, attachments = item.config.stash[ANNOTATION_SINK_KEY].drain()
    for annotation in annotations:
        report.user_properties.append(("finding", annotation))
    for attachment in attachments:
        report.sections.append(
            (attachment.name, attachment.body.decode("utf-8", errors="replace"))
        )


def pytest_terminal_summary(terminalreporter, exitstatus: int, config: pytest.Config) -> None:
    summary = get_finding_log(config).get_summary()
    if summary.total == 0:
        return

    terminalreporter.section("Test Findings Summary")

    current_test = None
    for finding in get_finding_log(config).get_warnings():
        if finding.test != current_test:
            current_test = finding.test
            terminalreporter.write_line(current_test, bold=True)
        terminalreporter.write_line(
            f"  {SEVERITY_ICONS[finding.severity]}: {finding.message}",
            **SEVERITY_MARKUP[finding.severity],
        )

    terminalreporter.write_line("")
    terminalreporter.write_line(
        f"Total: {summary.total}  Critical: {summary.critical}  "
        f"Warnings: {summary.warnings}  Info: {summary.info}"
    )


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    output = session.config.getoption("--findings-output")
    if output:
        export_findings_json(output, get_finding_log(session.config).get_warnings())


@pytest.fixture(scope="session")
def harness_config(pytestconfig: pytest.Config) -> HarnessConfig:
    """Configuration for this run (environment, then bookingprobe.yaml)."""
    try:
        return load_config(pytestconfig.getoption("--bookingprobe-config"))
    except ConfigError as e:
        pytest.fail(f"bookingprobe configuration error: {e}", pytrace=False)


@pytest.fixture
def api_client(harness_config: HarnessConfig) -> BookingApiClient:
    """Client for the configured booking service."""
    return BookingApiClient.from_config(harness_config)


@pytest.fixture
def finding_log(request: pytest.FixtureRequest) -> Iterator[FindingLog]:
    """The session's finding log, attributing findings to the current test."""
    log = get_finding_log(request.config)
    with log.bind(request.node.nodeid):
        yield log
