"""CLI for the formlogic conditional logic engine."""

import json
from pathlib import Path
from typing import Annotated

import jsonschema
import typer
from rich.console import Console
from rich.table import Table

from formlogic import __version__
from formlogic.config import (
    LOG_LEVEL_ENV,
    REGISTRY_ENV,
    SCHEMA_DIR_ENV,
    QUESTIONNAIRE_SCHEMA_FILENAME,
    load_settings,
)
from formlogic.io import load_responses, write_jsonl
from formlogic.logging_setup import configure_logging
from formlogic.logic import ConditionalLogicEngine
from formlogic.registry import (
    QuestionnaireNotFoundError,
    QuestionnaireRegistry,
    QuestionnaireSpec,
    QuestionnaireValidationError,
    convert_legacy_questionnaire,
)
from formlogic.registry.questionnaires import load_questionnaire_file

app = typer.Typer(
    name="formlogic",
    help="Conditional visibility and requirement engine for questionnaires.",
    no_args_is_help=True,
)
console = Console()

QuestionnaireOption = Annotated[
    str | None,
    typer.Option("--questionnaire", "-q", help="Questionnaire ID in the registry"),
]
VersionOption = Annotated[
    str | None,
    typer.Option("--questionnaire-version", help="Questionnaire version (default: latest)"),
]
SpecOption = Annotated[
    Path | None,
    typer.Option("--spec", "-s", help="Questionnaire spec file (instead of --questionnaire)"),
]
ResponsesOption = Annotated[
    Path | None,
    typer.Option("--responses", "-r", help="Responses JSONL file"),
]
RegistryOption = Annotated[
    Path | None,
    typer.Option("--registry", envvar=REGISTRY_ENV, help="Path to questionnaire registry"),
]
SchemaDirOption = Annotated[
    Path | None,
    typer.Option("--schema-dir", envvar=SCHEMA_DIR_ENV, help="Directory holding the questionnaire schema"),
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"formlogic version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", envvar=LOG_LEVEL_ENV, help="Log level (default: WARNING)"),
    ] = None,
) -> None:
    """formlogic: Conditional visibility and requirement engine for questionnaires."""
    configure_logging(log_level or load_settings().log_level)


def _schema_path(schema_dir: Path | None) -> Path | None:
    if schema_dir is None:
        schema_dir = load_settings().schema_dir
    path = schema_dir / QUESTIONNAIRE_SCHEMA_FILENAME
    return path if path.exists() else None


def _load_spec(
    questionnaire: str | None,
    version: str | None,
    spec: Path | None,
    registry: Path | None,
    schema_dir: Path | None,
) -> QuestionnaireSpec:
    schema_path = _schema_path(schema_dir)
    try:
        if spec is not None:
            schema = json.loads(schema_path.read_text()) if schema_path else None
            return load_questionnaire_file(spec, schema)

        if not questionnaire:
            console.print("[red]Error:[/red] Provide --questionnaire or --spec")
            raise typer.Exit(1)

        if registry is None:
            registry = load_settings().questionnaire_registry_path
        if not registry.exists():
            console.print(f"[red]Error:[/red] Questionnaire registry not found: {registry}")
            raise typer.Exit(1)

        questionnaires = QuestionnaireRegistry(registry, schema_path=schema_path)
        if version:
            return questionnaires.get(questionnaire, version)
        return questionnaires.get_latest(questionnaire)
    except (QuestionnaireNotFoundError, QuestionnaireValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _build_engine(spec: QuestionnaireSpec, responses: Path | None) -> ConditionalLogicEngine:
    loaded = {}
    if responses is not None:
        if not responses.exists():
            console.print(f"[red]Error:[/red] Responses file not found: {responses}")
            raise typer.Exit(1)
        try:
            loaded = load_responses(responses)
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
    return ConditionalLogicEngine(spec.all_questions(), loaded)


def _print_warnings(engine: ConditionalLogicEngine) -> None:
    report = engine.diagnostics
    for warning in report.warnings:
        where = f" ({warning.question_id})" if warning.question_id else ""
        console.print(f"[yellow]Warning:[/yellow] {warning.code}{where}: {warning.message}")


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


@app.command()
def evaluate(
    questionnaire: QuestionnaireOption = None,
    version: VersionOption = None,
    spec: SpecOption = None,
    responses: ResponsesOption = None,
    registry: RegistryOption = None,
    schema_dir: SchemaDirOption = None,
    output_path: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write resolved states as JSONL"),
    ] = None,
) -> None:
    """Resolve visible/required/disabled for every question."""
    questionnaire_spec = _load_spec(questionnaire, version, spec, registry, schema_dir)
    engine = _build_engine(questionnaire_spec, responses)
    states = engine.get_states()

    table = Table(title=f"{questionnaire_spec.name} ({questionnaire_spec.questionnaire_id}@{questionnaire_spec.version})")
    table.add_column("Question")
    table.add_column("Visible")
    table.add_column("Required")
    table.add_column("Disabled")
    for question_id, state in states.items():
        table.add_row(question_id, _flag(state.visible), _flag(state.required), _flag(state.disabled))
    console.print(table)

    visible = sum(1 for state in states.values() if state.visible)
    console.print(f"Visible: {visible}/{len(states)}")

    if output_path is not None:
        written = write_jsonl(
            output_path,
            [{"question_id": qid, **state.model_dump()} for qid, state in states.items()],
        )
        console.print(f"States written: {written}")

    _print_warnings(engine)


@app.command()
def explain(
    question_id: Annotated[str, typer.Argument(help="Question to explain")],
    questionnaire: QuestionnaireOption = None,
    version: VersionOption = None,
    spec: SpecOption = None,
    responses: ResponsesOption = None,
    registry: RegistryOption = None,
    schema_dir: SchemaDirOption = None,
) -> None:
    """Show how each condition on a question evaluated."""
    questionnaire_spec = _load_spec(questionnaire, version, spec, registry, schema_dir)
    engine = _build_engine(questionnaire_spec, responses)

    if engine.get_question(question_id) is None:
        console.print(f"[red]Error:[/red] Unknown question: {question_id}")
        raise typer.Exit(1)

    state = engine.get_question_state(question_id)
    console.print(f"[bold]{question_id}[/bold]")
    path = engine.get_evaluation_path(question_id)
    if not path:
        console.print("  (no conditions)")
    for line in path:
        console.print(f"  {line}", markup=False)
    console.print(
        f"visible={state.visible} required={state.required} disabled={state.disabled}"
    )
    _print_warnings(engine)


@app.command()
def dependents(
    question_id: Annotated[str, typer.Argument(help="Question whose dependents to list")],
    questionnaire: QuestionnaireOption = None,
    version: VersionOption = None,
    spec: SpecOption = None,
    registry: RegistryOption = None,
    schema_dir: SchemaDirOption = None,
) -> None:
    """List the questions affected when a question's answer changes."""
    questionnaire_spec = _load_spec(questionnaire, version, spec, registry, schema_dir)
    engine = _build_engine(questionnaire_spec, None)

    found = sorted(engine.get_dependent_questions(question_id))
    if not found:
        console.print(f"No questions depend on {question_id}")
        return
    for dependent in found:
        console.print(dependent)


@app.command()
def validate(
    spec_path: Annotated[
        Path,
        typer.Argument(help="Path to the questionnaire spec file"),
    ],
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", help="Path to the schema file"),
    ] = None,
) -> None:
    """Validate a questionnaire spec file against its schema."""
    if not spec_path.exists():
        console.print(f"[red]Error:[/red] Spec file not found: {spec_path}")
        raise typer.Exit(1)

    if schema_path is None:
        schema_path = load_settings().questionnaire_schema_path

    if not schema_path.exists():
        console.print(f"[red]Error:[/red] Schema file not found: {schema_path}")
        raise typer.Exit(1)

    with open(spec_path) as f:
        spec = json.load(f)

    with open(schema_path) as f:
        schema = json.load(f)

    try:
        jsonschema.validate(spec, schema)
        console.print(f"[green]Valid:[/green] {spec_path}")
    except jsonschema.ValidationError as e:
        console.print(f"[red]Invalid:[/red] {e.message}")
        raise typer.Exit(1)


@app.command()
def convert(
    legacy_path: Annotated[Path, typer.Argument(help="Front-end questionnaire JSON")],
    output_path: Annotated[Path, typer.Argument(help="Where to write the questionnaire spec")],
    questionnaire_id: Annotated[
        str,
        typer.Option("--id", help="Questionnaire ID for the generated spec"),
    ],
    spec_version: Annotated[
        str,
        typer.Option("--spec-version", help="Version for the generated spec"),
    ] = "1.0.0",
) -> None:
    """Convert a front-end (camelCase) questionnaire to questionnaire_spec format."""
    if not legacy_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {legacy_path}")
        raise typer.Exit(1)

    with open(legacy_path) as f:
        data = json.load(f)

    try:
        spec = convert_legacy_questionnaire(data, questionnaire_id, spec_version)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(spec, f, indent=2)

    question_count = sum(len(group["questions"]) for group in spec["groups"])
    console.print(f"[green]Converted:[/green] {question_count} questions -> {output_path}")


if __name__ == "__main__":
    app()
