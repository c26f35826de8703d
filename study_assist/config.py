"""Configuration loading for study-assist."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from study_assist.llm import DEFAULT_API_KEY_ENV, DEFAULT_BASE_URL, DEFAULT_MODEL

CONFIG_FILENAMES = (".study-assist.toml", "study-assist.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("study_assist", "study-assist")
LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}


@dataclass(slots=True)
class LlmConfig:
    """Text-generator connection settings."""

    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    api_key_env: str = DEFAULT_API_KEY_ENV
    temperature: float | None = None
    max_tokens: int | None = None
    timeout_seconds: float = 60.0
    memory_turns: int = 0
    system_prompt: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "base_url": self.base_url,
            "api_key_env": self.api_key_env,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout_seconds": self.timeout_seconds,
            "memory_turns": self.memory_turns,
            "system_prompt": self.system_prompt,
        }


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    fail_below: int | None = None
    log_level: str = "warning"
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    llm: LlmConfig = field(default_factory=LlmConfig)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "fail_below": self.fail_below,
            "log_level": self.log_level,
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "llm": self.llm.to_dict(),
            "source": self.source,
        }


def load_app_config(directory: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or directory-local files with precedence."""
    directory = directory.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (directory / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = directory / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = directory / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "human"',
            "fail_below = 60",
            'log_level = "warning"',
            "",
            "[rules]",
            "enable = [",
            '  "line_length",',
            '  "magic_numbers",',
            '  "unused_declarations",',
            '  "deferred_markers",',
            "]",
            "disable = []",
            "",
            "[llm]",
            f'model = "{DEFAULT_MODEL}"',
            f'base_url = "{DEFAULT_BASE_URL}"',
            f'api_key_env = "{DEFAULT_API_KEY_ENV}"',
            "temperature = 0.7",
            "max_tokens = 2048",
            "timeout_seconds = 60",
            "memory_turns = 0",
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    llm_mapping = _as_table(mapping.get("llm"), "llm")

    raw_format = mapping.get("format", "human")
    format_value = str(raw_format).lower()
    if format_value not in {"human", "json"}:
        format_value = "human"

    raw_fail = mapping.get("fail_below")
    if raw_fail is None:
        fail_value: int | None = None
    else:
        fail_value = _as_int(raw_fail, "fail_below")

    return AppConfig(
        format=format_value,
        fail_below=fail_value,
        log_level=_as_choice(mapping.get("log_level", "warning"), LOG_LEVELS, "log_level"),
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable")),
        rule_disable=_as_str_list(rules_mapping.get("disable")),
        llm=_parse_llm_config(llm_mapping),
        source=source,
    )


def _parse_llm_config(value: dict[str, Any]) -> LlmConfig:
    raw_temperature = value.get("temperature")
    raw_max_tokens = value.get("max_tokens")
    raw_system_prompt = value.get("system_prompt")

    timeout = _as_float(value.get("timeout_seconds", 60.0), "llm.timeout_seconds")
    if timeout <= 0:
        raise ValueError("llm.timeout_seconds must be > 0")
    memory_turns = _as_int(value.get("memory_turns", 0), "llm.memory_turns")
    if memory_turns < 0:
        raise ValueError("llm.memory_turns must be >= 0")

    return LlmConfig(
        model=_as_str(value.get("model", DEFAULT_MODEL), "llm.model"),
        base_url=_as_str(value.get("base_url", DEFAULT_BASE_URL), "llm.base_url"),
        api_key_env=_as_str(value.get("api_key_env", DEFAULT_API_KEY_ENV), "llm.api_key_env"),
        temperature=(
            None if raw_temperature is None else _as_float(raw_temperature, "llm.temperature")
        ),
        max_tokens=None if raw_max_tokens is None else _as_int(raw_max_tokens, "llm.max_tokens"),
        timeout_seconds=timeout,
        memory_turns=memory_turns,
        system_prompt=(
            None if raw_system_prompt is None else _as_str(raw_system_prompt, "llm.system_prompt")
        ),
    )


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("Expected a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("Expected a list of strings")
        items.append(item)
    return items


def _as_str_list_or_none(value: Any) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value)


def _as_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    return raw


def _as_float(raw: Any, field_name: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"{field_name} must be a number")
    return float(raw)
