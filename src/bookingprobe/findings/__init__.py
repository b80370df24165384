"""Finding logging, sinks and export."""

from .models import Finding, FindingSummary, Severity, SEVERITY_ICONS
from .logger import FindingLog
from .sinks import AnnotationSink, Attachment, ConsoleSink, FindingSink
from .export import (
    FindingLoadError,
    build_sarif,
    export_findings_json,
    export_sarif,
    load_findings,
)

__all__ = [
    "Finding",
    "FindingSummary",
    "Severity",
    "SEVERITY_ICONS",
    "FindingLog",
    "AnnotationSink",
    "Attachment",
    "ConsoleSink",
    "FindingSink",
    "FindingLoadError",
    "build_sarif",
    "export_findings_json",
    "export_sarif",
    "load_findings",
]
