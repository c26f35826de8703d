"""Ordered keyword classification for languages, subjects and request types."""

from __future__ import annotations

from dataclasses import dataclass

from study_assist.logging import get_logger

log = get_logger("classify")

DEFAULT_LANGUAGE = "unknown"
DEFAULT_SUBJECT = "通用"
REQUEST_TYPE_QUESTION = "question"
REQUEST_TYPE_CODE_REVIEW = "code_review"


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """Assigns ``category`` when any keyword occurs in the text."""

    category: str
    keywords: tuple[str, ...]

    def matches(self, lowered_text: str) -> bool:
        return any(keyword.lower() in lowered_text for keyword in self.keywords)


# Order is precedence: the first matching rule wins.
LANGUAGE_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("python", ("def ", "import ", "print(", "if __name__")),
    KeywordRule("javascript", ("function ", "const ", "let ", "var ", "console.log")),
    KeywordRule("java", ("public class", "public static void", "System.out.println")),
    KeywordRule("cpp", ("#include", "int main", "std::cout")),
)

SUBJECT_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("编程", ("代码", "编程", "function", "class")),
    KeywordRule("数学", ("数学", "计算", "公式", "方程")),
    KeywordRule("物理", ("物理", "力学", "电学", "光学")),
    KeywordRule("化学", ("化学", "分子", "反应", "元素")),
)

REQUEST_TYPE_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        REQUEST_TYPE_CODE_REVIEW,
        ("function ", "def ", "class ", "const ", "public ", "#include"),
    ),
)


def classify(text: str, rules: tuple[KeywordRule, ...], default: str) -> str:
    """Return the category of the first rule matching ``text``, else ``default``."""
    lowered = text.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.category
    return default


def detect_language(code: str) -> str:
    language = classify(code, LANGUAGE_RULES, DEFAULT_LANGUAGE)
    log.debug("detected language %s", language)
    return language


def detect_subject(question: str) -> str:
    subject = classify(question, SUBJECT_RULES, DEFAULT_SUBJECT)
    log.debug("detected subject %s", subject)
    return subject


def detect_request_type(user_input: str) -> str:
    return classify(user_input, REQUEST_TYPE_RULES, REQUEST_TYPE_QUESTION)
