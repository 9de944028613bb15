"""Command-line interface for prompt recipe templates."""

import json
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .errors import ParameterTypeError, PromptRecipeError
from .formatters import FORMATTERS, get_formatter
from .logger import setup_logging
from .models import Chat, Completion, InvocationTemplate, Template, Unrecognized
from .parser import load_template
from .renderer import default_renderer

console = Console()

LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]


def handle_error(e: PromptRecipeError) -> NoReturn:
    """Display a library error and exit.

    Args:
        e: The PromptRecipeError to display

    Raises:
        SystemExit: Always exits with code 1
    """
    console.print(f"[red]Error:[/red] {escape(e.message)}")
    if e.suggestion:
        console.print(f"[yellow]Suggestion:[/yellow] {escape(e.suggestion)}")
    raise SystemExit(1)


def load_or_exit(file: str) -> Template:
    """Load a template file, exiting with a message on failure."""
    try:
        return load_template(file)
    except PromptRecipeError as e:
        handle_error(e)


def kind_of(template: Template) -> str:
    """Name the kind of a parsed template."""
    if isinstance(template, Completion):
        return "completion"
    if isinstance(template, Chat):
        return "chat"
    return "unrecognized"


@click.group()
@click.version_option(version=__version__, prog_name="prompt-recipe")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS),
    default="warning",
    envvar="PROMPT_RECIPE_LOG_LEVEL",
    show_default=True,
    help="Library log level",
)
@click.option("--verbose", "-v", is_flag=True, help="Shortcut for --log-level debug")
def cli(log_level: str, verbose: bool) -> None:
    """Prompt Recipe - inspect and render LLM prompt templates.

    Use 'prompt-recipe COMMAND --help' for more information on a command.
    """
    setup_logging("debug" if verbose else log_level)  # type: ignore[arg-type]


@cli.command("validate")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def validate_template(file: str) -> None:
    """Check that a template file parses."""
    template = load_or_exit(file)

    if isinstance(template, Unrecognized):
        console.print(
            "[yellow]⚠[/yellow] Template type is not completion or chat; "
            "it will be ignored"
        )
        return

    console.print(
        f"[green]✓[/green] Valid {kind_of(template)} template for "
        f"{escape(template.vendor)}/{escape(template.model)}"
    )


@cli.command("show")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output parsed template as JSON")
def show_template(file: str, as_json: bool) -> None:
    """Show details of a template."""
    template = load_or_exit(file)

    if as_json:
        data = {"kind": kind_of(template)}
        data.update(template.model_dump(mode="json", exclude_none=True))
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    if isinstance(template, Unrecognized):
        console.print("[yellow]Unrecognized template type; nothing to show.[/yellow]")
        return

    console.print(
        Panel(
            f"[bold]{escape(template.vendor)}/{escape(template.model)}[/bold]",
            subtitle=kind_of(template),
        )
    )
    _show_parameters(template)

    if isinstance(template, Completion):
        _show_completion(template)
    else:
        _show_chat(template)


def _show_parameters(template: InvocationTemplate) -> None:
    """Print the parameters table."""
    if not template.parameters:
        return

    console.print("\n[bold]Parameters:[/bold]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Value")
    for parameter in template.parameters:
        table.add_row(escape(parameter.name), escape(str(parameter.value)))
    console.print(table)


def _show_completion(completion: Completion) -> None:
    """Print the prompt and example table of a completion template."""
    console.print("\n[bold]Prompt:[/bold]")
    console.print(Panel(escape(completion.prompt)))

    if not completion.examples:
        return

    count = completion.example_count()
    console.print(f"\n[bold]Examples ({count}):[/bold]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim")
    for column in completion.examples:
        table.add_column(escape(column.name))
    for i, row in enumerate(default_renderer.example_rows(completion), start=1):
        table.add_row(str(i), *(escape(value) for _, value in row))
    test_row = default_renderer.test_row(completion)
    table.add_row("test", *(escape(value) for _, value in test_row), style="green")
    console.print(table)


def _show_chat(chat: Chat) -> None:
    """Print the context, examples and messages of a chat template."""
    if chat.context:
        console.print(f"\n[dim]Context:[/dim] {escape(chat.context)}")

    for title, turns in (("Examples", chat.examples), ("Messages", chat.messages)):
        if not turns:
            continue
        console.print(f"\n[bold]{title}:[/bold]")
        table = Table(show_header=True, header_style="bold")
        table.add_column("Input")
        table.add_column("Output")
        for turn in turns:
            output = turn.output if turn.output is not None else "-"
            table.add_row(escape(turn.input), escape(output))
        console.print(table)


@cli.command("render")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(list(FORMATTERS)),
    default="raw",
    help="Output format (default: raw)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write output to file instead of stdout",
)
def render_template(file: str, output_format: str, output: str | None) -> None:
    """Render the final prompt of a completion template.

    Output formats:
      raw       The prompt exactly as it would be sent
      json      JSON with vendor, model and parameters
      markdown  Markdown formatted
    """
    template = load_or_exit(file)

    if not isinstance(template, Completion):
        raise click.UsageError(
            f"Only completion templates can be rendered, got {kind_of(template)}"
        )

    rendered = template.final_prompt()
    formatted_output = get_formatter(output_format).format(rendered, template)

    if output:
        output_path = Path(output)
        output_path.write_text(formatted_output, encoding="utf-8")
        console.print(f"[green]Output written to:[/green] {output_path}")
    else:
        click.echo(formatted_output, nl=not formatted_output.endswith("\n"))


@cli.command("param")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("name")
@click.option(
    "--as",
    "kind",
    type=click.Choice(["int", "float", "str", "bool"]),
    default="str",
    help="Scalar kind to read the parameter as (default: str)",
)
def show_parameter(file: str, name: str, kind: str) -> None:
    """Print one parameter of a template as a typed value."""
    template = load_or_exit(file)

    if not isinstance(template, InvocationTemplate):
        raise click.UsageError("Unrecognized templates have no parameters")

    accessors = {
        "int": template.parameter_as_int,
        "float": template.parameter_as_float,
        "str": template.parameter_as_str,
        "bool": template.parameter_as_bool,
    }
    try:
        value = accessors[kind](name)
    except ParameterTypeError as e:
        handle_error(e)

    if value is None:
        console.print(f"[yellow]Parameter '{escape(name)}' is not set[/yellow]")
        raise SystemExit(1)

    click.echo(value if isinstance(value, str) else json.dumps(value))
