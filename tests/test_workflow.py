"""Tests for the study-assistant workflow."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from study_assist.guidance import GENERAL_IMPROVEMENTS
from study_assist.llm import GenerationError
from study_assist.prompts import CODE_REVIEW_PREFIX, build_outbound_prompt
from study_assist.workflow import StudyAssistant


@dataclass(slots=True)
class FakeGenerator:
    """Records prompts and replies with a canned answer."""

    reply: str = "好的"
    prompts: list[str] = field(default_factory=list)

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


class FailingGenerator:
    def generate(self, prompt: str) -> str:
        raise GenerationError("upstream unavailable")


def test_code_input_is_prefixed_and_analyzed() -> None:
    generator = FakeGenerator(reply="这段代码定义了一个空函数。")
    user_input = "请解释一下这段代码：function test(){}"

    reply = StudyAssistant(generator).handle(user_input)

    assert generator.prompts == [CODE_REVIEW_PREFIX + user_input]
    assert reply.request_type == "code_review"
    assert reply.response == "这段代码定义了一个空函数。"
    assert reply.confidence == 0.9
    assert reply.analysis is not None
    assert reply.analysis.type == "code_review"
    assert reply.analysis.score == 85
    assert reply.analysis.suggestions == (
        *GENERAL_IMPROVEMENTS,
        "使用ES6+语法特性",
        "考虑使用TypeScript提高代码质量",
    )
    assert reply.review is not None
    assert reply.review.language == "javascript"


def test_review_suggestions_lead_with_issue_suggestions_without_duplicates() -> None:
    code = "const a = 10000;\nconst b = 20000;"
    reply = StudyAssistant(FakeGenerator()).handle(code)
    assert reply.analysis is not None
    suggestions = reply.analysis.suggestions
    assert suggestions is not None
    assert suggestions[0] == "考虑将数字定义为常量以提高代码可维护性"
    assert len(suggestions) == len(set(suggestions))


def test_question_is_sent_unchanged_without_analysis() -> None:
    generator = FakeGenerator()
    reply = StudyAssistant(generator).handle("数学中的方程怎么解？")

    assert generator.prompts == ["数学中的方程怎么解？"]
    assert reply.request_type == "question"
    assert reply.analysis is None
    assert reply.review is None
    assert reply.related_topics == ("数学",)


def test_explicit_request_type_overrides_detection() -> None:
    generator = FakeGenerator()
    reply = StudyAssistant(generator).handle("def f(): pass", request_type="question")
    assert generator.prompts == ["def f(): pass"]
    assert reply.analysis is None


def test_generator_errors_propagate() -> None:
    with pytest.raises(GenerationError, match="upstream unavailable"):
        StudyAssistant(FailingGenerator()).handle("什么是变量？")


def test_build_outbound_prompt() -> None:
    assert build_outbound_prompt("x", "question") == "x"
    assert build_outbound_prompt("x", "code_review") == "请审查以下代码并提供改进建议：\n\nx"
