"""
Core data structures for level validation.

Defines the types shared by every level check:
- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationIssue: Individual validation finding
- ValidationResult: Collection of issues with pass/fail status
- ValidationError: Exception raised when validation fails
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..generators.errors import ChunkStitchError


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, reported but doesn't affect pass/fail
    - WARN: Suspicious but structurally sound
    - FAIL: A level invariant is broken
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class ValidationIssue:
    """Represents a single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "LVL-001")
        message: Human-readable description
        remediation: Optional suggested fix
        chunk: Optional chunk index the issue refers to
        context: Optional "chunk.context" reference
    """
    severity: Severity
    code: str
    message: str
    remediation: Optional[str] = None
    chunk: Optional[int] = None
    context: Optional[str] = None

    def format(self) -> str:
        """Format issue for display.

        Returns:
            [SEVERITY] CODE chunk=N context=N.M :: message :: fix=FIX
        """
        chunk = '-' if self.chunk is None else self.chunk
        context = self.context or '-'
        fix = self.remediation or 'N/A'
        return (
            f"[{self.severity}] {self.code} chunk={chunk} context={context} :: "
            f"{self.message} :: fix={fix}"
        )

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination."""
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """Check if validation passed (no FAIL issues)."""
        return not self.failed

    @property
    def failed(self) -> bool:
        return any(i.severity == Severity.FAIL for i in self.issues)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    @property
    def infos(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    def codes(self) -> List[str]:
        """Rule codes of all issues, in report order."""
        return [i.code for i in self.issues]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one.

        Returns:
            Self for chaining
        """
        self.issues.extend(other.issues)
        return self

    def report(self) -> str:
        """Generate a multi-line report of all issues, grouped by severity."""
        if not self.issues:
            return "Validation passed: No issues found"

        status = "PASSED" if self.passed else "FAILED"
        lines = [f"Validation {status}: {len(self.issues)} issue(s)", "-" * 60]

        for severity in [Severity.FAIL, Severity.WARN, Severity.INFO]:
            severity_issues = [i for i in self.issues if i.severity == severity]
            if severity_issues:
                lines.append(f"\n{severity.name} ({len(severity_issues)}):")
                for issue in severity_issues:
                    lines.append(issue.format())

        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'passed': self.passed,
            'issue_count': len(self.issues),
            'fail_count': len(self.errors),
            'warn_count': len(self.warnings),
            'info_count': len(self.infos),
            'issues': [
                {
                    'severity': str(issue.severity),
                    'code': issue.code,
                    'message': issue.message,
                    'remediation': issue.remediation,
                    'chunk': issue.chunk,
                    'context': issue.context,
                }
                for issue in self.issues
            ]
        }


class ValidationError(ChunkStitchError):
    """Exception raised when validation fails with FAIL severity issues.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
