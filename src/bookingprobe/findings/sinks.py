"""Sinks that receive findings as they are logged."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape

from .models import SEVERITY_ICONS, AnnotationDict, Finding, Severity

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}


@runtime_checkable
class FindingSink(Protocol):
    """Anything that wants to see findings as they are logged."""

    def record(self, finding: Finding) -> None: ...


@dataclass(frozen=True)
class Attachment:
    """Plain-text attachment for report viewers."""

    name: str
    content_type: str
    body: bytes


def annotation_for(finding: Finding) -> AnnotationDict:
    """Runner-neutral annotation for a finding."""
    return {
        "type": f"{finding.severity.value.lower()}-finding",
        "description": f"{SEVERITY_ICONS[finding.severity]} {finding.message}",
    }


def attachment_for(finding: Finding) -> Attachment:
    """Text attachment for a finding."""
    return Attachment(
        name=f"{finding.severity.value} Finding",
        content_type="text/plain",
        body=f"[{finding.severity.value}] {finding.message}".encode("utf-8"),
    )


class ConsoleSink:
    """Print each finding as one console line."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def record(self, finding: Finding) -> None:
        style = SEVERITY_STYLES[finding.severity]
        icon = SEVERITY_ICONS[finding.severity]
        label = escape(f"[{finding.severity.value}]")
        self.console.print(
            f"[{style}]{icon} {label}[/{style}] {escape(finding.message)}",
            highlight=False,
        )


class AnnotationSink:
    """Collect annotations and attachments for a reporter to pick up.

    ``drain()`` hands everything collected so far to the caller and
    starts over, so a reporter can take one test's findings at a time.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._annotations: list[AnnotationDict] = []
        self._attachments: list[Attachment] = []

    def record(self, finding: Finding) -> None:
        with self._lock:
            self._annotations.append(annotation_for(finding))
            self._attachments.append(attachment_for(finding))

    @property
    def annotations(self) -> list[AnnotationDict]:
        with self._lock:
            return list(self._annotations)

    @property
    def attachments(self) -> list[Attachment]:
        with self._lock:
            return list(self._attachments)

    def drain(self) -> tuple[list[AnnotationDict], list[Attachment]]:
        with self._lock:
            annotations, self._annotations = self._annotations, []
            attachments, self._attachments = self._attachments, []
        return annotations, attachments
