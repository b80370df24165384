"""Findings file I/O and SARIF export."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final, Iterable, Union

from .models import Finding, Severity

SARIF_VERSION: Final[str] = "2.1.0"
SARIF_SCHEMA: Final[str] = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json"

TOOL_NAME: Final[str] = "bookingprobe"

SARIF_LEVELS: Final[dict[Severity, str]] = {
    Severity.CRITICAL: "error",
    Severity.WARNING: "warning",
    Severity.INFO: "note",
}

RULES: Final[list[dict[str, Any]]] = [
    {
        "id": f"BP-{severity.value}",
        "name": f"{severity.value.title()}Finding",
        "shortDescription": {
            "text": f"{severity.value.title()} finding reported by an API test",
        },
        "defaultConfiguration": {"level": SARIF_LEVELS[severity]},
    }
    for severity in (Severity.CRITICAL, Severity.WARNING, Severity.INFO)
]

_RULE_INDEX: Final[dict[Severity, int]] = {
    Severity.CRITICAL: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}


class FindingLoadError(Exception):
    """Exception raised when a findings file cannot be read."""

    pass


def export_findings_json(
    output_path: Union[str, Path],
    findings: Iterable[Finding],
) -> None:
    """Write findings (and their summary counts) as JSON."""
    items = [f.to_dict() for f in findings]
    counts = {s.value: sum(1 for f in items if f["severity"] == s.value) for s in Severity}
    data = {
        "summary": {"total": len(items), **counts},
        "findings": items,
    }
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_findings(input_path: Union[str, Path]) -> list[Finding]:
    """Read findings written by export_findings_json.

    Raises:
        FindingLoadError: If the file is unreadable or malformed
    """
    path = Path(input_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise FindingLoadError(f"Invalid JSON in findings file '{path}': {e}") from e
    except OSError as e:
        raise FindingLoadError(f"Cannot read findings file '{path}': {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("findings", []), list):
        raise FindingLoadError(f"Unexpected findings file layout in '{path}'")

    try:
        return [Finding.from_dict(item) for item in data.get("findings", [])]
    except (ValueError, AttributeError) as e:
        raise FindingLoadError(f"Invalid finding in '{path}': {e}") from e


def _build_sarif_result(finding: Finding) -> dict[str, Any]:
    """Build a single SARIF result from a finding."""
    return {
        "ruleId": f"BP-{finding.severity.value}",
        "ruleIndex": _RULE_INDEX[finding.severity],
        "level": SARIF_LEVELS[finding.severity],
        "message": {"text": finding.message},
        "locations": [{
            "logicalLocations": [{"fullyQualifiedName": finding.test}],
        }],
        "properties": {
            "test": finding.test,
            "severity": finding.severity.value,
            "timestamp": finding.timestamp,
        },
    }


def build_sarif(findings: Iterable[Finding]) -> dict[str, Any]:
    """Build a SARIF 2.1.0 log for the given findings."""
    from .. import __version__

    return {
        "$schema": SARIF_SCHEMA,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "version": __version__,
                        "rules": RULES,
                    },
                },
                "results": [_build_sarif_result(f) for f in findings],
            },
        ],
    }


def export_sarif(
    output_path: Union[str, Path],
    findings: Iterable[Finding],
) -> None:
    """Export findings to SARIF 2.1.0 format."""
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(build_sarif(findings), f, indent=2, ensure_ascii=False)
