"""Study-assistant workflow: route input, call the generator, attach analysis."""

from __future__ import annotations

from dataclasses import dataclass

from study_assist.classify import REQUEST_TYPE_CODE_REVIEW, detect_request_type
from study_assist.guidance import extract_topics
from study_assist.llm import TextGenerator
from study_assist.logging import get_logger
from study_assist.prompts import build_outbound_prompt
from study_assist.review import ReviewResult, review_code
from study_assist.rules.base import Rule

log = get_logger("workflow")

# Fixed value reported with every reply; not derived from the generated text.
WORKFLOW_CONFIDENCE = 0.9


@dataclass(frozen=True, slots=True)
class Analysis:
    type: str
    score: int | None = None
    suggestions: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class AssistantReply:
    request_type: str
    response: str
    related_topics: tuple[str, ...]
    confidence: float
    analysis: Analysis | None = None
    review: ReviewResult | None = None


class StudyAssistant:
    """Routes user input to the text generator and the rule-based review."""

    def __init__(self, generator: TextGenerator, *, rules: list[Rule] | None = None) -> None:
        self._generator = generator
        self._rules = rules

    def handle(self, user_input: str, request_type: str | None = None) -> AssistantReply:
        """Handle one request.

        Generator errors propagate unchanged; there is no partial reply.
        """
        resolved_type = request_type or detect_request_type(user_input)
        log.debug("handling %s request (%d chars)", resolved_type, len(user_input))

        response = self._generator.generate(build_outbound_prompt(user_input, resolved_type))

        analysis: Analysis | None = None
        review: ReviewResult | None = None
        if resolved_type == REQUEST_TYPE_CODE_REVIEW:
            review = review_code(user_input, rules=self._rules)
            analysis = Analysis(
                type=REQUEST_TYPE_CODE_REVIEW,
                score=review.overall_score,
                suggestions=tuple(_review_suggestions(review)),
            )

        return AssistantReply(
            request_type=resolved_type,
            response=response,
            related_topics=tuple(extract_topics(user_input)),
            confidence=WORKFLOW_CONFIDENCE,
            analysis=analysis,
            review=review,
        )


def _review_suggestions(review: ReviewResult) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for item in [*(issue.suggestion for issue in review.issues), *review.improvements]:
        if item in seen:
            continue
        seen.add(item)
        output.append(item)
    return output
