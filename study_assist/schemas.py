"""Request/response contracts at the tool and workflow boundary.

Payloads use camelCase keys. Requests are validated here and only here;
the classification and review code assumes well-typed input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from study_assist.qa import QaResult
from study_assist.review import ReviewResult
from study_assist.workflow import AssistantReply

RequestType = Literal["question", "code_review"]
Difficulty = Literal["easy", "medium", "hard"]


class RequestValidationError(ValueError):
    """Raised when a request payload does not match its schema."""


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkflowRequest(_Schema):
    user_input: str
    request_type: RequestType | None = None


class QaRequest(_Schema):
    question: str
    subject: str | None = None
    difficulty: Difficulty | None = None


class ReviewRequest(_Schema):
    code: str
    language: str | None = None
    context: str | None = None


class IssueModel(_Schema):
    type: Literal["error", "warning", "suggestion"]
    severity: Literal["high", "medium", "low"]
    message: str
    line: int | None = None
    suggestion: str


class ComplexityModel(_Schema):
    cyclomatic: int
    cognitive: int
    maintainability: str


class PerformanceModel(_Schema):
    time_complexity: str
    space_complexity: str
    optimization: list[str]


class ReviewResponse(_Schema):
    language: str
    overall_score: int = Field(ge=0, le=100)
    issues: list[IssueModel]
    improvements: list[str]
    best_practices: list[str]
    complexity: ComplexityModel
    performance: PerformanceModel


class QaResponse(_Schema):
    subject: str
    answer: str
    explanation: str
    related_concepts: list[str]
    difficulty: str
    confidence: float = Field(ge=0.0, le=1.0)


class AnalysisModel(_Schema):
    type: str
    score: int | None = None
    suggestions: list[str] | None = None


class WorkflowResponse(_Schema):
    request_type: RequestType
    response: str
    analysis: AnalysisModel | None = None
    related_topics: list[str]
    confidence: float


_RequestT = TypeVar("_RequestT", bound=_Schema)


def parse_request(model: type[_RequestT], payload: Mapping[str, Any]) -> _RequestT:
    """Validate a raw payload, raising ``RequestValidationError`` on mismatch."""
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise RequestValidationError(_describe(exc)) from exc


def review_response(result: ReviewResult) -> ReviewResponse:
    return ReviewResponse(
        language=result.language,
        overall_score=result.overall_score,
        issues=[
            IssueModel(
                type=issue.type,
                severity=issue.severity,
                message=issue.message,
                line=issue.line,
                suggestion=issue.suggestion,
            )
            for issue in result.issues
        ],
        improvements=list(result.improvements),
        best_practices=list(result.best_practices),
        complexity=ComplexityModel(
            cyclomatic=result.complexity.cyclomatic,
            cognitive=result.complexity.cognitive,
            maintainability=result.complexity.maintainability,
        ),
        performance=PerformanceModel(
            time_complexity=result.performance.time_complexity,
            space_complexity=result.performance.space_complexity,
            optimization=list(result.performance.optimization),
        ),
    )


def qa_response(result: QaResult) -> QaResponse:
    return QaResponse(
        subject=result.subject,
        answer=result.answer,
        explanation=result.explanation,
        related_concepts=list(result.related_concepts),
        difficulty=result.difficulty,
        confidence=result.confidence,
    )


def workflow_response(reply: AssistantReply) -> WorkflowResponse:
    analysis = None
    if reply.analysis is not None:
        analysis = AnalysisModel(
            type=reply.analysis.type,
            score=reply.analysis.score,
            suggestions=(
                list(reply.analysis.suggestions)
                if reply.analysis.suggestions is not None
                else None
            ),
        )
    return WorkflowResponse(
        request_type=reply.request_type,
        response=reply.response,
        analysis=analysis,
        related_topics=list(reply.related_topics),
        confidence=reply.confidence,
    )


def dump(model: BaseModel) -> dict[str, Any]:
    """Serialize a response with camelCase keys, omitting unset optionals."""
    return model.model_dump(by_alias=True, exclude_none=True)


def _describe(exc: ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "payload"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
