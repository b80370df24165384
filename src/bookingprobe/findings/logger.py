"""Finding log: ordered, thread-safe record of test findings."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional, Union

from rich.console import Console

from .models import Finding, FindingSummary, Severity
from .sinks import FindingSink

NO_TEST = "<no test>"

_stderr = Console(stderr=True)


def _now_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class FindingLog:
    """Append-only log of findings, forwarded to sinks as they arrive.

    The log is an ordinary object: whoever creates it owns it and passes
    it to the tests that write to it. ``context`` names the test that
    findings are currently attributed to.

    Appends and reads share one lock, so concurrent ``log`` calls never
    lose entries and queries always see a consistent snapshot.
    """

    def __init__(
        self,
        sinks: Iterable[FindingSink] = (),
        context: Optional[str] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._findings: list[Finding] = []
        self._sinks: list[FindingSink] = list(sinks)
        self.context = context

    def add_sink(self, sink: FindingSink) -> None:
        self._sinks.append(sink)

    @contextmanager
    def bind(self, test_name: str) -> Iterator["FindingLog"]:
        """Attribute findings to ``test_name`` for the duration of the block."""
        previous = self.context
        self.context = test_name
        try:
            yield self
        finally:
            self.context = previous

    def log(self, severity: Severity, message: str) -> Finding:
        """Log a finding and forward it to every sink."""
        finding = Finding(
            test=self.context or NO_TEST,
            severity=Severity(severity),
            message=message,
            timestamp=_now_iso(),
        )
        with self._lock:
            self._findings.append(finding)

        for sink in list(self._sinks):
            try:
                sink.record(finding)
            except Exception as e:
                _stderr.print(
                    f"[red]Finding sink {type(sink).__name__} failed:[/red] {e}",
                    highlight=False,
                )
        return finding

    log_warning = log

    def info(self, message: str) -> Finding:
        """Log an informational finding"""
        return self.log(Severity.INFO, message)

    def warning(self, message: str) -> Finding:
        """Log a warning-level finding"""
        return self.log(Severity.WARNING, message)

    def critical(self, message: str) -> Finding:
        """Log a critical security/bug finding"""
        return self.log(Severity.CRITICAL, message)

    def get_warnings(self) -> list[Finding]:
        """Snapshot of all findings in logging order."""
        with self._lock:
            return list(self._findings)

    def get_warnings_by_severity(self, severity: Union[Severity, str]) -> list[Finding]:
        severity = Severity(severity)
        return [f for f in self.get_warnings() if f.severity is severity]

    def clear_warnings(self) -> None:
        """Drop all findings (sinks are kept)."""
        with self._lock:
            self._findings = []

    def get_summary(self) -> FindingSummary:
        findings = self.get_warnings()
        critical = [f for f in findings if f.severity is Severity.CRITICAL]
        warnings = [f for f in findings if f.severity is Severity.WARNING]
        info = [f for f in findings if f.severity is Severity.INFO]

        return FindingSummary(
            total=len(findings),
            critical=len(critical),
            warnings=len(warnings),
            info=len(info),
            details={
                "critical": critical,
                "warnings": warnings,
                "info": info,
            },
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self.get_warnings())
