"""CLI entrypoint for study-assist."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

from study_assist import __version__
from study_assist.config import AppConfig, default_config_template, load_app_config
from study_assist.llm import ChatClient, ConversationMemory, GenerationError
from study_assist.logging import configure_logging, get_logger
from study_assist.output import (
    render_json,
    render_qa_human,
    render_reply_human,
    render_review_human,
)
from study_assist.prompts import STUDY_ASSISTANT_INSTRUCTIONS
from study_assist.qa import answer_question
from study_assist.review import review_code
from study_assist.rules import build_rules, list_rule_info
from study_assist.rules.base import Rule
from study_assist.schemas import (
    QaRequest,
    RequestValidationError,
    ReviewRequest,
    WorkflowRequest,
    dump,
    parse_request,
    qa_response,
    review_response,
    workflow_response,
)
from study_assist.tools import TOOLS, run_tool
from study_assist.workflow import StudyAssistant

log = get_logger("cli")

app = typer.Typer(
    name="study-assist",
    no_args_is_help=True,
    help="Review code and answer study questions with rule-based heuristics and an LLM.",
)

DirOption = Annotated[Path, typer.Option("--dir", help="Directory to search for config.")]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config TOML file."),
]
FormatOption = Annotated[
    str | None, typer.Option(help="Output format: human|json.", show_default="human")
]


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Root command callback."""
    _ = version
    ctx.obj = {"verbose": verbose}


@app.command("review")
def review_command(
    ctx: typer.Context,
    code: Annotated[str | None, typer.Argument(help="Code to review.")] = None,
    code_file: Annotated[Path | None, typer.Option(help="Path to a source file.")] = None,
    stdin: Annotated[bool, typer.Option(help="Read code from stdin.")] = False,
    language: Annotated[str | None, typer.Option(help="Language; detected if omitted.")] = None,
    context: Annotated[str | None, typer.Option(help="What the code is for.")] = None,
    format: FormatOption = None,
    fail_below: Annotated[
        int | None, typer.Option(help="Exit nonzero if the score is below this value.")
    ] = None,
    directory: DirOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Review a code sample with the rule-based analyzer."""
    app_config = _load_config_or_raise(ctx, directory, config_file)
    output_format = _resolve_format(format, app_config)
    source_text = _read_single_input(
        value=code, file_path=code_file, stdin=stdin, value_name="CODE", file_option="--code-file"
    )
    request = _parse_or_raise(
        ReviewRequest, {"code": source_text, "language": language, "context": context}
    )
    rules = _build_configured_rules_or_raise(app_config)

    result = review_code(request.code, request.language, rules=rules)
    if output_format == "json":
        typer.echo(render_json(dump(review_response(result)), command="review"))
    else:
        typer.echo(render_review_human(result))

    threshold = fail_below if fail_below is not None else app_config.fail_below
    if threshold is not None and result.overall_score < threshold:
        raise typer.Exit(code=1)


@app.command("ask")
def ask_command(
    ctx: typer.Context,
    question: Annotated[str, typer.Argument(help="The study question.")],
    subject: Annotated[str | None, typer.Option(help="Subject; detected if omitted.")] = None,
    difficulty: Annotated[
        str | None, typer.Option(help="easy|medium|hard; estimated if omitted.")
    ] = None,
    format: FormatOption = None,
    directory: DirOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Classify a question and show subject, difficulty and related concepts."""
    app_config = _load_config_or_raise(ctx, directory, config_file)
    output_format = _resolve_format(format, app_config)
    request = _parse_or_raise(
        QaRequest, {"question": question, "subject": subject, "difficulty": difficulty}
    )

    result = answer_question(request.question, request.subject, request.difficulty)
    if output_format == "json":
        typer.echo(render_json(dump(qa_response(result)), command="ask"))
    else:
        typer.echo(render_qa_human(result))


@app.command("assist")
def assist_command(
    ctx: typer.Context,
    user_input: Annotated[str | None, typer.Argument(help="Question or code.")] = None,
    stdin: Annotated[bool, typer.Option(help="Read input from stdin.")] = False,
    request_type: Annotated[
        str | None, typer.Option(help="question|code_review; detected if omitted.")
    ] = None,
    format: FormatOption = None,
    directory: DirOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Send a question or code to the LLM and attach rule-based analysis."""
    app_config = _load_config_or_raise(ctx, directory, config_file)
    output_format = _resolve_format(format, app_config)
    text = _read_single_input(
        value=user_input, file_path=None, stdin=stdin, value_name="USER_INPUT", file_option=None
    )
    request = _parse_or_raise(WorkflowRequest, {"userInput": text, "requestType": request_type})
    rules = _build_configured_rules_or_raise(app_config)

    assistant = StudyAssistant(build_chat_client(app_config), rules=rules)
    try:
        reply = assistant.handle(request.user_input, request.request_type)
    except GenerationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if output_format == "json":
        typer.echo(render_json(dump(workflow_response(reply)), command="assist"))
    else:
        typer.echo(render_reply_human(reply))


@app.command("tool")
def tool_command(
    ctx: typer.Context,
    tool_id: Annotated[str, typer.Argument(help=f"One of: {', '.join(sorted(TOOLS))}.")],
    payload: Annotated[str | None, typer.Option(help="JSON request payload.")] = None,
    stdin: Annotated[bool, typer.Option(help="Read the JSON payload from stdin.")] = False,
    directory: DirOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Run a tool handler on a raw JSON payload and print its JSON response."""
    app_config = _load_config_or_raise(ctx, directory, config_file)
    raw = _read_single_input(
        value=payload, file_path=None, stdin=stdin, value_name="--payload", file_option=None
    )
    try:
        parsed: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(
            f"payload is not valid JSON: {exc}", param_hint="--payload"
        ) from exc
    if not isinstance(parsed, dict):
        raise typer.BadParameter("payload must be a JSON object", param_hint="--payload")

    rules = _build_configured_rules_or_raise(app_config)
    try:
        result = run_tool(tool_id, parsed, rules=rules)
    except RequestValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--payload") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="TOOL_ID") from exc
    typer.echo(json.dumps(result, sort_keys=True, ensure_ascii=False))


@app.command("rules")
def rules_command(
    ctx: typer.Context,
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    directory: DirOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """List available review rules."""
    output_format = _check_format(format)
    app_config = _load_config_or_raise(ctx, directory, config_file)
    active_ids = {rule.rule_id for rule in _build_configured_rules_or_raise(app_config)}
    rule_info = list_rule_info()

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "name": item.name,
                    "description": item.description,
                    "category": item.category,
                    "scope": item.scope,
                    "enabled": item.rule_id in active_ids,
                }
                for item in rule_info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        status = "enabled" if item.rule_id in active_ids else "disabled"
        lines.append(f"- {item.rule_id} [{status}] ({item.scope}) - {item.description}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    ctx: typer.Context,
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    directory: DirOption = Path("."),
    config_file: ConfigOption = None,
) -> None:
    """Show resolved configuration."""
    output_format = _check_format(format)
    app_config = _load_config_or_raise(ctx, directory, config_file)
    active_rules = _build_configured_rules_or_raise(app_config)
    payload = app_config.to_dict()
    payload["active_rule_ids"] = [rule.rule_id for rule in active_rules]

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True, ensure_ascii=False))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- fail_below: {payload['fail_below']}",
        f"- log_level: {payload['log_level']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- llm.model: {payload['llm']['model']}",
        f"- llm.base_url: {payload['llm']['base_url']}",
        f"- active_rule_ids: {payload['active_rule_ids']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".study-assist.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


@app.command("config-validate")
def config_validate_command(
    ctx: typer.Context,
    directory: DirOption = Path("."),
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to config TOML file to validate."),
    ] = Path(".study-assist.toml"),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Validate a config file and report active rules."""
    output_format = _check_format(format)
    app_config = _load_config_or_raise(ctx, directory, config_file)
    active_rules = _build_configured_rules_or_raise(app_config)
    payload = {
        "ok": True,
        "source": app_config.source,
        "active_rule_ids": [rule.rule_id for rule in active_rules],
    }
    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return
    typer.echo(
        "\n".join(
            [
                "Config is valid.",
                f"- source: {payload['source']}",
                f"- active_rule_ids: {payload['active_rule_ids']}",
            ]
        )
    )


def main() -> None:
    """Console script entrypoint."""
    app()


def build_chat_client(app_config: AppConfig) -> ChatClient:
    """Create the text generator from ``[llm]`` settings."""
    llm = app_config.llm
    memory = ConversationMemory(llm.memory_turns) if llm.memory_turns > 0 else None
    return ChatClient(
        model=llm.model,
        base_url=llm.base_url,
        api_key_env=llm.api_key_env,
        system_prompt=llm.system_prompt or STUDY_ASSISTANT_INSTRUCTIONS,
        temperature=llm.temperature,
        max_tokens=llm.max_tokens,
        timeout_seconds=llm.timeout_seconds,
        memory=memory,
    )


def _load_config_or_raise(
    ctx: typer.Context, directory: Path, config_file: Path | None = None
) -> AppConfig:
    try:
        app_config = load_app_config(directory, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc

    verbose = bool((ctx.obj or {}).get("verbose", False))
    configure_logging(verbose=verbose, level=app_config.log_level)
    log.debug("config source: %s", app_config.source or "defaults")
    return app_config


def _build_configured_rules_or_raise(app_config: AppConfig) -> list[Rule]:
    try:
        return build_rules(
            enabled_rule_ids=app_config.rule_enable,
            disabled_rule_ids=app_config.rule_disable,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc


def _parse_or_raise(model: Any, payload: dict[str, Any]) -> Any:
    cleaned = {key: value for key, value in payload.items() if value is not None}
    try:
        return parse_request(model, cleaned)
    except RequestValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _read_single_input(
    *,
    value: str | None,
    file_path: Path | None,
    stdin: bool,
    value_name: str,
    file_option: str | None,
) -> str:
    provided = [item for item in (value is not None, file_path is not None, stdin) if item]
    sources = " or ".join(item for item in (value_name, file_option, "--stdin") if item)
    if len(provided) > 1:
        raise typer.BadParameter(f"Use only one of {sources}.")
    if value is not None:
        return value
    if file_path is not None:
        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise typer.BadParameter(f"Cannot read {file_path}: {exc}") from exc
    if stdin:
        try:
            return sys.stdin.read()
        except UnicodeDecodeError as exc:
            raise typer.BadParameter(f"Cannot read stdin: {exc}") from exc
    raise typer.BadParameter(f"Provide {sources}.")


def _resolve_format(value: str | None, app_config: AppConfig) -> str:
    return _check_format(value or app_config.format)


def _check_format(value: str) -> str:
    output_format = value.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    return output_format
