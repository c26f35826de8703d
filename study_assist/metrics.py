"""Complexity and performance heuristics.

Both are substring counts over raw text, not syntax-aware analysis. A line
holding two branch keywords counts once, and keywords inside strings or
comments count as branches. The time/space complexity labels are fixed
placeholders and say nothing about the submitted code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

BASE_COMPLEXITY = 1
BRANCH_KEYWORDS = ("if ", "else if ", "for ", "while ", "case ", "catch ")
COGNITIVE_FACTOR = 0.8
POOR_ABOVE = 10
FAIR_ABOVE = 5

PLACEHOLDER_TIME_COMPLEXITY = "O(n)"
PLACEHOLDER_SPACE_COMPLEXITY = "O(1)"

# (token, minimum occurrences, hint)
PERFORMANCE_PATTERNS = (
    ("for ", 2, "避免嵌套循环，考虑使用更高效的算法"),
    ("document.getElementById", 2, "缓存DOM查询结果以提高性能"),
    ("SELECT *", 1, "避免使用SELECT *，只查询需要的字段"),
)
NO_PERFORMANCE_ISSUES = "代码性能表现良好"


@dataclass(frozen=True, slots=True)
class ComplexityMetrics:
    cyclomatic: int
    cognitive: int
    maintainability: str


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    time_complexity: str
    space_complexity: str
    optimization: tuple[str, ...]


def analyze_complexity(code: str) -> ComplexityMetrics:
    """Approximate cyclomatic complexity from branch-keyword lines."""
    cyclomatic = BASE_COMPLEXITY
    for line in code.split("\n"):
        if any(keyword in line for keyword in BRANCH_KEYWORDS):
            cyclomatic += 1

    return ComplexityMetrics(
        cyclomatic=cyclomatic,
        cognitive=math.floor(cyclomatic * COGNITIVE_FACTOR),
        maintainability=maintainability_tier(cyclomatic),
    )


def maintainability_tier(cyclomatic: int) -> str:
    if cyclomatic > POOR_ABOVE:
        return "poor"
    if cyclomatic > FAIR_ABOVE:
        return "fair"
    return "good"


def analyze_performance(code: str) -> PerformanceMetrics:
    """Collect optimization hints from repeated loop, DOM and SQL patterns."""
    hints = [
        hint for token, minimum, hint in PERFORMANCE_PATTERNS if code.count(token) >= minimum
    ]
    return PerformanceMetrics(
        time_complexity=PLACEHOLDER_TIME_COMPLEXITY,
        space_complexity=PLACEHOLDER_SPACE_COMPLEXITY,
        optimization=tuple(hints) if hints else (NO_PERFORMANCE_ISSUES,),
    )
