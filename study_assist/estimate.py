"""Difficulty, confidence and overall-score estimators.

None of these look at meaning. Difficulty is an ordered phrase lookup,
confidence is a constant per subject, and the review score is a fixed set
of deductions over line counts.
"""

from __future__ import annotations

from types import MappingProxyType

from study_assist.classify import DEFAULT_SUBJECT, KeywordRule, classify
from study_assist.source import CodeStats

DEFAULT_DIFFICULTY = "medium"

DIFFICULTY_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("easy", ("什么是", "解释", "定义")),
    KeywordRule("medium", ("如何", "为什么", "比较")),
    KeywordRule("hard", ("证明", "推导", "分析")),
)

DEFAULT_CONFIDENCE = 0.80

# Static per-subject values; they do not reflect answer quality.
CONFIDENCE_BY_SUBJECT = MappingProxyType(
    {
        "编程": 0.85,
        "数学": 0.90,
        "物理": 0.88,
        "化学": 0.87,
        DEFAULT_SUBJECT: DEFAULT_CONFIDENCE,
    }
)

BASE_SCORE = 100

# (threshold, deduction) pairs; each exceeded threshold applies.
LINE_COUNT_DEDUCTIONS = ((100, 10), (500, 20))
LOW_COMMENT_RATIO = 0.1
LOW_COMMENT_DEDUCTION = 15
HIGH_COMMENT_RATIO = 0.3
HIGH_COMMENT_DEDUCTION = 5


def assess_difficulty(question: str) -> str:
    """Estimate question difficulty from wording."""
    return classify(question, DIFFICULTY_RULES, DEFAULT_DIFFICULTY)


def subject_confidence(subject: str) -> float:
    return CONFIDENCE_BY_SUBJECT.get(subject, DEFAULT_CONFIDENCE)


def overall_score(stats: CodeStats) -> int:
    """Score a code sample in [0, 100] from its size and comment density."""
    score = BASE_SCORE
    for threshold, deduction in LINE_COUNT_DEDUCTIONS:
        if stats.total_lines > threshold:
            score -= deduction

    if stats.comment_ratio < LOW_COMMENT_RATIO:
        score -= LOW_COMMENT_DEDUCTION
    if stats.comment_ratio > HIGH_COMMENT_RATIO:
        score -= HIGH_COMMENT_DEDUCTION
    return _clamp(score)


def _clamp(value: int, lower: int = 0, upper: int = 100) -> int:
    return max(lower, min(upper, value))
