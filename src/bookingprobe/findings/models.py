"""Data models for test findings."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, TypedDict


class Severity(str, Enum):
    """Finding severity levels."""

    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


SEVERITY_ICONS: dict[Severity, str] = {
    Severity.CRITICAL: "🔴 CRITICAL",
    Severity.WARNING: "⚠️  WARNING",
    Severity.INFO: "ℹ️  INFO",
}


class FindingDict(TypedDict):
    """TypedDict for a finding in an exported findings file."""

    test: str
    severity: str
    message: str
    timestamp: str


class AnnotationDict(TypedDict):
    """TypedDict for a finding annotation handed to a reporter."""

    type: str
    description: str


@dataclass(frozen=True)
class Finding:
    """A security, performance or behaviour observation logged by a test."""

    test: str
    severity: Severity
    message: str
    timestamp: str

    def to_dict(self) -> FindingDict:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data  # type: ignore[return-value]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Finding":
        return cls(
            test=str(data.get("test", "")),
            severity=Severity(data.get("severity", Severity.INFO.value)),
            message=str(data.get("message", "")),
            timestamp=str(data.get("timestamp", "")),
        )


@dataclass
class FindingSummary:
    """Finding counts per severity, with the findings behind each count."""

    total: int = 0
    critical: int = 0
    warnings: int = 0
    info: int = 0
    details: dict[str, list[Finding]] = field(
        default_factory=lambda: {"critical": [], "warnings": [], "info": []}
    )
