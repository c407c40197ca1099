"""
Data models for the Content Quality Validator.

This module defines the core data structures shared by the validators,
the runner and the reporting layer. JSON serialization uses the camelCase
keys that CI tooling consumes.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Optional


class Severity(str, Enum):
    """Severity level for validation issues."""
    ERROR = "error"  # Fails the build
    WARNING = "warning"  # Visible, non-blocking
    INFO = "info"  # Advisory only


class ContentType(str, Enum):
    """Content collections handled by the validator."""
    SERVICE = "service"
    LOCATION = "location"

    @classmethod
    def from_path(cls, file_path: str) -> "ContentType":
        """Derive the content type from the directory a file lives in."""
        if "services" in Path(file_path).parts:
            return cls.SERVICE
        return cls.LOCATION


@dataclass(frozen=True)
class ParsedContent:
    """A parsed MDX content file (frontmatter + prose body)."""
    file_path: str
    file_name: str
    type: ContentType
    frontmatter: dict[str, Any]
    body: str


@dataclass
class ValidatorConfig:
    """
    Settings for a single validator.

    Attributes:
        enabled: Whether the validator runs at all.
        severity: Default severity for issues this validator raises.
            Individual checks may override it (e.g. informational checks).
        thresholds: Named numeric bounds (e.g. titleLengthMin).
    """
    enabled: bool = True
    severity: Severity = Severity.WARNING
    thresholds: dict[str, float] = field(default_factory=dict)

    def threshold(self, name: str, default: float) -> float:
        """Get a threshold value, falling back to the given default."""
        value = self.thresholds.get(name)
        return default if value is None else value

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "severity": self.severity.value,
            "thresholds": dict(self.thresholds),
        }


@dataclass
class ValidationIssue:
    """A single problem found by a validator."""
    severity: Severity
    code: str  # Stable identifier, e.g. "READ_001", "SEO_003", "UNIQ_001"
    message: str
    field: Optional[str] = None  # Frontmatter path, e.g. "keywords[0]"
    suggestion: Optional[str] = None
    score: Optional[float] = None
    details: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict, omitting unset optional keys."""
        data: dict[str, Any] = {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
        }
        if self.field is not None:
            data["field"] = self.field
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        if self.score is not None:
            data["score"] = self.score
        if self.details is not None:
            data["details"] = self.details
        return data


@dataclass
class ValidationResult:
    """Output of one validator on one file."""
    file: str
    type: ContentType
    validator: str
    issues: list[ValidationIssue] = field(default_factory=list)
    metrics: dict[str, float] = field(default_factory=dict)
    duration: float = 0.0  # Milliseconds

    @property
    def passed(self) -> bool:
        """True when no issue has error severity."""
        return self.error_count == 0

    @property
    def error_count(self) -> int:
        return self._count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(Severity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(Severity.INFO)

    def _count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "type": self.type.value,
            "validator": self.validator,
            "passed": self.passed,
            "issues": [issue.to_dict() for issue in self.issues],
            "metrics": dict(self.metrics),
            "duration": self.duration,
        }


@dataclass
class RunnerOptions:
    """
    Options for a validation run.

    Attributes:
        validators: Validator names to run. None or empty means all.
        file: Single file to validate instead of the whole content tree.
        verbose: Show suggestions and metrics in text output.
        output_format: "text" or "json".
        configs: Per-validator partial config overrides, keyed by name.
            Each override may carry "enabled", "severity" and "thresholds".
    """
    validators: Optional[list[str]] = None
    file: Optional[str] = None
    verbose: bool = False
    output_format: Literal["text", "json"] = "text"
    configs: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass
class AggregatedResults:
    """Summary of a whole validation run."""
    total_files: int = 0
    passed_files: int = 0
    error_files: int = 0
    warning_files: int = 0
    total_errors: int = 0
    total_warnings: int = 0
    total_info: int = 0
    results: dict[str, list[ValidationResult]] = field(default_factory=dict)
    duration: float = 0.0  # Milliseconds

    @property
    def passed(self) -> bool:
        """Warnings do not fail the build; only errors do."""
        return self.total_errors == 0

    def summary_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "passedFiles": self.passed_files,
            "errorFiles": self.error_files,
            "warningFiles": self.warning_files,
            "totalErrors": self.total_errors,
            "totalWarnings": self.total_warnings,
            "totalInfo": self.total_info,
            "duration": self.duration,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON report shape: {summary, results}."""
        return {
            "summary": self.summary_dict(),
            "results": {
                file_path: [result.to_dict() for result in file_results]
                for file_path, file_results in self.results.items()
            },
        }
