"""Tool handlers: validate a raw payload, run the core, return the response payload."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any

from study_assist.qa import answer_question
from study_assist.review import review_code
from study_assist.rules.base import Rule
from study_assist.schemas import (
    QaRequest,
    ReviewRequest,
    dump,
    parse_request,
    qa_response,
    review_response,
)

ToolHandler = Callable[[Mapping[str, Any]], dict[str, Any]]


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """A tool id and its handler; ``uses_rules`` handlers also accept ``rules=``."""

    tool_id: str
    description: str
    handler: Callable[..., dict[str, Any]]
    uses_rules: bool = False


def run_code_review_tool(
    payload: Mapping[str, Any], rules: list[Rule] | None = None
) -> dict[str, Any]:
    request = parse_request(ReviewRequest, payload)
    result = review_code(request.code, request.language, rules=rules)
    return dump(review_response(result))


def run_qa_tool(payload: Mapping[str, Any]) -> dict[str, Any]:
    request = parse_request(QaRequest, payload)
    result = answer_question(request.question, request.subject, request.difficulty)
    return dump(qa_response(result))


TOOLS: dict[str, ToolSpec] = {
    "code-review": ToolSpec(
        tool_id="code-review",
        description="代码审查工具，支持代码质量分析、优化建议、问题识别和最佳实践指导",
        handler=run_code_review_tool,
        uses_rules=True,
    ),
    "smart-qa": ToolSpec(
        tool_id="smart-qa",
        description="智能问答工具，支持多学科知识问答、概念解释和解题思路分析",
        handler=run_qa_tool,
    ),
}


def resolve_tool(tool_id: str, rules: list[Rule] | None = None) -> ToolHandler:
    """Return the handler for ``tool_id`` with ``rules`` bound where the tool takes them."""
    spec = TOOLS.get(tool_id)
    if spec is None:
        choices = ", ".join(sorted(TOOLS))
        raise ValueError(f"Unknown tool '{tool_id}'. Expected one of: {choices}")
    if spec.uses_rules:
        return partial(spec.handler, rules=rules)
    return spec.handler


def run_tool(
    tool_id: str, payload: Mapping[str, Any], rules: list[Rule] | None = None
) -> dict[str, Any]:
    """Dispatch a payload to a tool by id."""
    return resolve_tool(tool_id, rules)(payload)
