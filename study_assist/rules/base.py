"""Base rule protocol and finding model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from study_assist.source import SourceCode

FindingType = Literal["error", "warning", "suggestion"]
Severity = Literal["high", "medium", "low"]


@dataclass(frozen=True, slots=True)
class Finding:
    """A single issue emitted by a rule."""

    rule_id: str
    type: FindingType
    severity: Severity
    message: str
    suggestion: str
    line: int | None = None


class Rule(Protocol):
    """Protocol for deterministic review rules."""

    rule_id: str

    def evaluate(self, source: SourceCode) -> list[Finding]:
        """Evaluate a code sample and return findings."""


class FixedFindingRule:
    """Base for rules whose findings always carry the same type, severity and text."""

    rule_id: str = ""
    type: FindingType = "warning"
    severity: Severity = "medium"
    message: str = ""
    suggestion: str = ""

    def evaluate(self, source: SourceCode) -> list[Finding]:
        raise NotImplementedError

    def _finding(self, line: int | None = None) -> Finding:
        return Finding(
            rule_id=self.rule_id,
            type=self.type,
            severity=self.severity,
            message=self.message,
            suggestion=self.suggestion,
            line=line,
        )


class LineRule(FixedFindingRule):
    """Checked against every line; one finding per matching line, 1-based."""

    def matches(self, line: str, source: SourceCode) -> bool:
        raise NotImplementedError

    def evaluate(self, source: SourceCode) -> list[Finding]:
        findings: list[Finding] = []
        for lineno, line in enumerate(source.lines, start=1):
            if self.matches(line, source):
                findings.append(self._finding(lineno))
        return findings


class DocumentRule(FixedFindingRule):
    """Checked once against the whole sample; the finding carries no line."""

    def matches(self, source: SourceCode) -> bool:
        raise NotImplementedError

    def evaluate(self, source: SourceCode) -> list[Finding]:
        if self.matches(source):
            return [self._finding()]
        return []
