"""Code review orchestration."""

from __future__ import annotations

from dataclasses import dataclass

from study_assist.classify import detect_language
from study_assist.estimate import overall_score
from study_assist.guidance import best_practices_for, improvements_for
from study_assist.logging import get_logger
from study_assist.metrics import (
    ComplexityMetrics,
    PerformanceMetrics,
    analyze_complexity,
    analyze_performance,
)
from study_assist.rules import default_rules
from study_assist.rules.base import Finding, Rule
from study_assist.source import CodeStats, SourceCode, measure

log = get_logger("review")


@dataclass(frozen=True, slots=True)
class ReviewResult:
    """Top-level review output from deterministic rules and lookup tables."""

    language: str
    overall_score: int
    issues: tuple[Finding, ...]
    improvements: tuple[str, ...]
    best_practices: tuple[str, ...]
    complexity: ComplexityMetrics
    performance: PerformanceMetrics
    stats: CodeStats


def review_code(
    code: str,
    language: str | None = None,
    rules: list[Rule] | None = None,
) -> ReviewResult:
    """Review a code sample.

    ``language`` overrides detection when given. Rules default to the
    built-in registry order.
    """
    resolved_language = language or detect_language(code)
    source = SourceCode(text=code, language=resolved_language)
    stats = measure(code)
    findings = analyze(source, rules=rules)
    log.debug(
        "reviewed %d lines of %s: %d findings",
        stats.total_lines,
        resolved_language,
        len(findings),
    )

    return aggregate(
        language=resolved_language,
        score=overall_score(stats),
        findings=findings,
        improvements=improvements_for(resolved_language),
        best_practices=best_practices_for(resolved_language),
        complexity=analyze_complexity(code),
        performance=analyze_performance(code),
        stats=stats,
    )


def analyze(source: SourceCode, rules: list[Rule] | None = None) -> list[Finding]:
    """Run rules and order findings by line, whole-sample findings last.

    The sort is stable, so findings on the same line keep rule order.
    """
    active_rules = rules if rules is not None else default_rules()
    findings: list[Finding] = []
    for rule in active_rules:
        findings.extend(rule.evaluate(source))
    return sorted(findings, key=_line_order)


def aggregate(
    *,
    language: str,
    score: int,
    findings: list[Finding],
    improvements: list[str],
    best_practices: list[str],
    complexity: ComplexityMetrics,
    performance: PerformanceMetrics,
    stats: CodeStats,
) -> ReviewResult:
    return ReviewResult(
        language=language,
        overall_score=score,
        issues=tuple(findings),
        improvements=tuple(improvements),
        best_practices=tuple(best_practices),
        complexity=complexity,
        performance=performance,
        stats=stats,
    )


def _line_order(finding: Finding) -> tuple[bool, int]:
    return (finding.line is None, finding.line or 0)
