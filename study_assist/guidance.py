"""Fixed advice tables keyed by language or subject."""

from __future__ import annotations

from types import MappingProxyType

from study_assist.classify import DEFAULT_LANGUAGE, DEFAULT_SUBJECT

GENERAL_IMPROVEMENTS = (
    "添加适当的注释说明代码功能",
    "使用有意义的变量和函数名称",
    "考虑添加错误处理机制",
)

LANGUAGE_IMPROVEMENTS = MappingProxyType(
    {
        "python": ("遵循PEP 8代码风格规范", "使用类型提示提高代码可读性"),
        "javascript": ("使用ES6+语法特性", "考虑使用TypeScript提高代码质量"),
        DEFAULT_LANGUAGE: (),
    }
)

BEST_PRACTICES = MappingProxyType(
    {
        "python": (
            "使用描述性的变量名",
            "遵循DRY原则（Don't Repeat Yourself）",
            "使用列表推导式简化代码",
            "适当使用异常处理",
            "编写单元测试",
        ),
        "javascript": (
            "使用const和let替代var",
            "使用箭头函数简化代码",
            "使用解构赋值",
            "使用模板字符串",
            "避免全局变量污染",
        ),
        "java": (
            "遵循Java命名约定",
            "使用访问修饰符控制可见性",
            "实现适当的异常处理",
            "使用接口和抽象类",
            "编写Javadoc注释",
        ),
        "cpp": (
            "使用智能指针管理内存",
            "遵循RAII原则",
            "使用const修饰符",
            "避免裸指针",
            "使用STL容器和算法",
        ),
        DEFAULT_LANGUAGE: (
            "保持代码简洁清晰",
            "添加适当的注释",
            "遵循语言特定的编码规范",
            "进行代码审查",
            "编写测试用例",
        ),
    }
)

RELATED_CONCEPTS = MappingProxyType(
    {
        "编程": ("变量", "函数", "循环", "条件语句", "面向对象"),
        "数学": ("代数", "几何", "微积分", "概率统计"),
        "物理": ("力学", "电学", "光学", "热学"),
        "化学": ("分子结构", "化学反应", "元素周期表"),
        DEFAULT_SUBJECT: ("基础概念", "核心原理", "应用方法"),
    }
)

TOPIC_SUBJECTS = ("数学", "物理", "化学", "编程", "算法", "数据结构")
TOPIC_LANGUAGES = ("python", "javascript", "java", "cpp", "c++", "typescript")


def improvements_for(language: str) -> list[str]:
    extras = LANGUAGE_IMPROVEMENTS.get(language, LANGUAGE_IMPROVEMENTS[DEFAULT_LANGUAGE])
    return [*GENERAL_IMPROVEMENTS, *extras]


def best_practices_for(language: str) -> list[str]:
    return list(BEST_PRACTICES.get(language, BEST_PRACTICES[DEFAULT_LANGUAGE]))


def related_concepts_for(subject: str) -> list[str]:
    return list(RELATED_CONCEPTS.get(subject, RELATED_CONCEPTS[DEFAULT_SUBJECT]))


def extract_topics(text: str) -> list[str]:
    """Return subject and language words mentioned in ``text``.

    Plain substring matching: "javascript" also yields "java".
    """
    lowered = text.lower()
    return [word for word in (*TOPIC_SUBJECTS, *TOPIC_LANGUAGES) if word in lowered]
