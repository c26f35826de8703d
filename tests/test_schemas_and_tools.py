"""Tests for boundary schemas and the tool handlers."""

from __future__ import annotations

import pytest

from study_assist.review import review_code
from study_assist.schemas import (
    QaRequest,
    RequestValidationError,
    ReviewRequest,
    WorkflowRequest,
    dump,
    parse_request,
    review_response,
)
from study_assist.tools import TOOLS, resolve_tool, run_qa_tool, run_tool


def test_parse_request_accepts_camel_case_and_field_names() -> None:
    by_alias = parse_request(WorkflowRequest, {"userInput": "hi", "requestType": "question"})
    assert by_alias.user_input == "hi"
    assert by_alias.request_type == "question"

    by_name = parse_request(WorkflowRequest, {"user_input": "hi"})
    assert by_name.request_type is None


def test_parse_request_reports_invalid_fields() -> None:
    with pytest.raises(RequestValidationError, match="requestType"):
        parse_request(WorkflowRequest, {"userInput": "hi", "requestType": "essay"})
    with pytest.raises(RequestValidationError, match="userInput"):
        parse_request(WorkflowRequest, {})
    with pytest.raises(RequestValidationError, match="difficulty"):
        parse_request(QaRequest, {"question": "q", "difficulty": "extreme"})
    with pytest.raises(RequestValidationError, match="code"):
        parse_request(ReviewRequest, {"code": 5})


def test_request_validation_error_is_value_error() -> None:
    assert issubclass(RequestValidationError, ValueError)


def test_review_response_dump_uses_camel_case_and_omits_missing_lines() -> None:
    payload = dump(review_response(review_code("// TODO\nlet n = 99999;")))
    assert payload["language"] == "javascript"
    assert set(payload) == {
        "language",
        "overallScore",
        "issues",
        "improvements",
        "bestPractices",
        "complexity",
        "performance",
    }
    assert set(payload["performance"]) == {"timeComplexity", "spaceComplexity", "optimization"}
    lines = [issue.get("line") for issue in payload["issues"]]
    assert lines == [2, None]
    assert "line" not in payload["issues"][1]


def test_code_review_tool_returns_response_payload() -> None:
    payload = run_tool("code-review", {"code": "function foo() { const x = 1000000; }"})
    assert payload["overallScore"] == 85
    assert payload["issues"] == [
        {
            "type": "suggestion",
            "severity": "low",
            "message": "发现可能的魔法数字",
            "line": 1,
            "suggestion": "考虑将数字定义为常量以提高代码可维护性",
        }
    ]
    assert payload["complexity"] == {"cyclomatic": 1, "cognitive": 0, "maintainability": "good"}


def test_smart_qa_tool_returns_response_payload() -> None:
    payload = run_tool("smart-qa", {"question": "什么是变量？"})
    assert payload["subject"] == "通用"
    assert payload["difficulty"] == "easy"
    assert payload["confidence"] == 0.8
    assert payload["relatedConcepts"] == ["基础概念", "核心原理", "应用方法"]


def test_run_tool_rejects_unknown_tool_and_bad_payload() -> None:
    with pytest.raises(ValueError, match="Unknown tool 'nope'"):
        run_tool("nope", {})
    with pytest.raises(RequestValidationError):
        run_tool("code-review", {})


def test_tool_registry_ids() -> None:
    assert sorted(TOOLS) == ["code-review", "smart-qa"]
    assert all(spec.description for spec in TOOLS.values())


def test_rules_are_bound_only_for_rule_driven_tools() -> None:
    assert resolve_tool("smart-qa", rules=[]) is run_qa_tool
    assert run_qa_tool({"question": "如何计算面积？"})["subject"] == "数学"

    review = resolve_tool("code-review", rules=[])
    assert review({"code": "function foo() { const x = 1000000; }"})["issues"] == []
