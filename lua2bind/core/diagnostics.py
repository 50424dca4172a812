"""Diagnostics for lua2bind

Structured records reported while extracting schemas and generating
bindings, plus a log that collects them and summarizes a run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List


class Severity(Enum):
    """Diagnostic severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticCode:
    """Stable diagnostic identifiers"""
    FILE_FAILED = "LB001"
    PARSE_ERROR = "LB002"
    NO_LUA_FILES = "LB003"
    OUTSIDE_LUA_DIRECTORY = "LB004"
    NOTHING_EXPOSED = "LB005"
    GENERATION_COMPLETE = "LB006"
    NO_TYPES_GENERATED = "LB007"
    SYNTAX_ERROR = "LB008"
    MEMBER_SKIPPED = "LB009"
    INTERNAL_ERROR = "LB999"


@dataclass(frozen=True)
class Diagnostic:
    """A single reported condition

    Attributes:
        code: Stable identifier (see DiagnosticCode)
        severity: INFO, WARNING or ERROR
        title: Short category title
        message: Human-readable description
    """
    code: str
    severity: Severity
    title: str
    message: str

    def format(self) -> str:
        return f"{self.severity.value} {self.code}: {self.message}"


class DiagnosticLog:
    """Collects diagnostics for one generation run"""

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def report(self, code: str, title: str, message: str,
               severity: Severity = Severity.WARNING) -> Diagnostic:
        """Record a diagnostic

        Args:
            code: Diagnostic code
            title: Short category title
            message: Human-readable description
            severity: Severity level (default: warning)

        Returns:
            The recorded Diagnostic
        """
        diagnostic = Diagnostic(code=code, severity=severity, title=title, message=message)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self.diagnostics.extend(diagnostics)

    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    def by_code(self, code: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def summary(self) -> Dict:
        """Count diagnostics by severity and by code

        Returns:
            Dictionary with total, by_severity and by_code counts
        """
        by_severity: Dict[Severity, int] = {}
        by_code: Dict[str, int] = {}
        for diagnostic in self.diagnostics:
            by_severity[diagnostic.severity] = by_severity.get(diagnostic.severity, 0) + 1
            by_code[diagnostic.code] = by_code.get(diagnostic.code, 0) + 1

        return {
            "total": len(self.diagnostics),
            "by_severity": by_severity,
            "by_code": by_code,
        }

    def format_summary(self) -> str:
        """Generate formatted summary string

        Returns:
            Formatted summary as string
        """
        summary = self.summary()
        lines = ["=== Diagnostics Summary ===", f"Total: {summary['total']}"]

        for severity in Severity:
            count = summary["by_severity"].get(severity, 0)
            if count:
                lines.append(f"  {severity.value}: {count}")

        if summary["by_code"]:
            lines.append("By code:")
            for code, count in sorted(summary["by_code"].items()):
                lines.append(f"  {code}: {count}")

        return "\n".join(lines)

    def clear(self) -> None:
        self.diagnostics.clear()
