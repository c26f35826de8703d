"""Tests for code review orchestration."""

from __future__ import annotations

from study_assist.guidance import BEST_PRACTICES, GENERAL_IMPROVEMENTS
from study_assist.review import review_code
from study_assist.rules import build_rules

SAMPLE = "function foo() { const x = 1000000; }"


def test_review_single_line_javascript_sample() -> None:
    result = review_code(SAMPLE)

    assert result.language == "javascript"
    assert result.overall_score == 85
    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.rule_id == "magic_numbers"
    assert issue.type == "suggestion"
    assert issue.severity == "low"
    assert issue.line == 1
    assert result.improvements == (
        *GENERAL_IMPROVEMENTS,
        "使用ES6+语法特性",
        "考虑使用TypeScript提高代码质量",
    )
    assert result.best_practices == BEST_PRACTICES["javascript"]
    assert result.complexity.cyclomatic == 1
    assert result.performance.optimization == ("代码性能表现良好",)


def test_review_is_deterministic() -> None:
    assert review_code(SAMPLE) == review_code(SAMPLE)


def test_explicit_language_overrides_detection() -> None:
    result = review_code("print('hi')", language="ruby")
    assert result.language == "ruby"
    assert result.best_practices == BEST_PRACTICES["unknown"]
    assert result.improvements == GENERAL_IMPROVEMENTS


def test_findings_sorted_by_line_with_document_findings_last() -> None:
    code = "\n".join(
        [
            "// TODO: tidy",
            "x = 1",
            "y = 12345 " + "a" * 130,
        ]
    )
    result = review_code(code)
    assert [(issue.rule_id, issue.line) for issue in result.issues] == [
        ("line_length", 3),
        ("magic_numbers", 3),
        ("deferred_markers", None),
    ]


def test_review_uses_provided_rules() -> None:
    rules = build_rules(enabled_rule_ids=["line_length"])
    result = review_code(SAMPLE, rules=rules)
    assert result.issues == ()


def test_review_empty_sample() -> None:
    result = review_code("")
    assert result.language == "unknown"
    assert result.overall_score == 85
    assert result.issues == ()
    assert result.stats.total_lines == 1
