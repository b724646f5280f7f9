"""
jsmods command line.

Every command runs one facade operation on a file (path mode). Mutating
commands print the new source, or write it back with --write.
"""

from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jsmods import __version__
from jsmods.logging_config import setup_logging
from jsmods.facade import CodemodFacade
from jsmods.files import write_file
from jsmods.schemas import OperationResult

app = typer.Typer(help="Structural codemods for JavaScript and CSS files.")
console = Console()


@app.callback()
def global_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """
    jsmods: deterministic structural edits for JavaScript and CSS.
    """
    if verbose:
        setup_logging(level="DEBUG", suppress_console=False, force=True)


@app.command("version")
def version_cmd():
    """Print the installed version."""
    typer.echo(__version__)


def _fail(result: OperationResult, json_output: bool) -> None:
    if json_output:
        typer.echo(result.model_dump_json())
    else:
        console.print(f"[red]Error ({result.operation}):[/red] {escape(result.error or str(result.payload))}")
    raise typer.Exit(code=1)


def _emit_check(result: OperationResult, json_output: bool) -> None:
    """Print a yes/no answer; an error result exits with status 1."""
    if not result.ok:
        _fail(result, json_output)
    if json_output:
        typer.echo(result.model_dump_json())
    else:
        typer.echo("true" if result.payload else "false")


def _emit_text(result: OperationResult, file: Path, write: bool, json_output: bool) -> None:
    """Print (or write back) the source produced by a mutating operation."""
    if not result.ok:
        _fail(result, json_output)

    if write:
        original = file.read_text(encoding="utf-8")
        changed = result.payload != original
        if changed:
            write_file(file, result.payload)
        if json_output:
            typer.echo(result.model_copy(update={"payload": {"file": str(file), "changed": changed}}).model_dump_json())
        elif changed:
            console.print(f"[green]Updated[/green] {escape(str(file))}")
        else:
            console.print(f"[dim]No changes[/dim] {escape(str(file))}")
        return

    if json_output:
        typer.echo(result.model_dump_json())
    else:
        typer.echo(result.payload, nl=False)


FILE_ARGUMENT = typer.Argument(..., help="JavaScript, TypeScript or CSS file")
WRITE_OPTION = typer.Option(False, "--write", "-w", help="Write the result back to the file")
JSON_OPTION = typer.Option(False, "--json", help="Output as JSON")


@app.command("imported")
def imported_cmd(
    file: Path = FILE_ARGUMENT,
    module: str = typer.Argument(..., help="Module path or full import statement"),
    json_output: bool = JSON_OPTION,
):
    """Check whether FILE imports MODULE (CSS files check @import rules)."""
    facade = CodemodFacade()
    if file.suffix.lower() == ".css":
        result = facade.css_module_imported(str(file), module, mode="path")
    else:
        result = facade.module_imported(str(file), module, mode="path")
    _emit_check(result, json_output)


@app.command("insert-imports")
def insert_imports_cmd(
    file: Path = FILE_ARGUMENT,
    lines: List[str] = typer.Option(..., "--line", "-l", help="Import statement to insert (repeatable)"),
    write: bool = WRITE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Insert import statements after the existing imports."""
    result = CodemodFacade().insert_imports(str(file), lines, mode="path")
    _emit_text(result, file, write, json_output)


@app.command("remove-imports")
def remove_imports_cmd(
    file: Path = FILE_ARGUMENT,
    targets: List[str] = typer.Argument(..., help="Module paths or import statements to remove"),
    write: bool = WRITE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Remove imports by module path or statement text."""
    result = CodemodFacade().remove_imports(str(file), targets, mode="path")
    _emit_text(result, file, write, json_output)


@app.command("live-socket")
def live_socket_cmd(
    file: Path = FILE_ARGUMENT,
    json_output: bool = JSON_OPTION,
):
    """Check whether FILE declares a LiveSocket."""
    result = CodemodFacade().exist_live_socket(str(file), mode="path")
    _emit_check(result, json_output)


@app.command("extend-hooks")
def extend_hooks_cmd(
    file: Path = FILE_ARGUMENT,
    names: List[str] = typer.Option(..., "--name", "-n", help="Hook name; prefix with ... for a spread (repeatable)"),
    write: bool = WRITE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Add hooks to the LiveSocket hooks object."""
    result = CodemodFacade().extend_hook_object(str(file), names, mode="path")
    _emit_text(result, file, write, json_output)


@app.command("remove-hooks")
def remove_hooks_cmd(
    file: Path = FILE_ARGUMENT,
    names: List[str] = typer.Option(..., "--name", "-n", help="Hook name; prefix with ... for a spread (repeatable)"),
    write: bool = WRITE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Remove hooks from the LiveSocket hooks object."""
    result = CodemodFacade().remove_objects_from_hooks(str(file), names, mode="path")
    _emit_text(result, file, write, json_output)


@app.command("extend-var")
def extend_var_cmd(
    file: Path = FILE_ARGUMENT,
    var_name: str = typer.Argument(..., help="Top-level variable holding an object literal"),
    names: List[str] = typer.Option(..., "--name", "-n", help="Entry name; prefix with ... for a spread (repeatable)"),
    write: bool = WRITE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Add entries to the object literal assigned to VAR_NAME."""
    result = CodemodFacade().extend_var_object_by_object_names(str(file), var_name, names, mode="path")
    _emit_text(result, file, write, json_output)


@app.command("var-exists")
def var_exists_cmd(
    file: Path = FILE_ARGUMENT,
    var_name: str = typer.Argument(..., help="Top-level variable name"),
    json_output: bool = JSON_OPTION,
):
    """Check whether FILE declares a top-level variable."""
    result = CodemodFacade().exist_var(str(file), var_name, mode="path")
    _emit_check(result, json_output)


@app.command("stats")
def stats_cmd(
    file: Path = FILE_ARGUMENT,
    json_output: bool = JSON_OPTION,
):
    """Count functions, classes, debuggers, imports, trys and throws."""
    result = CodemodFacade().statistics(str(file), mode="path")
    if not result.ok:
        _fail(result, json_output)

    if json_output:
        typer.echo(result.model_dump_json())
        return

    table = Table(title=f"Statistics: {escape(str(file))}")
    table.add_column("Node", style="cyan")
    table.add_column("Count", justify="right", style="magenta")
    for name, count in result.payload.model_dump().items():
        table.add_row(name, str(count))
    console.print(table)


@app.command("format")
def format_cmd(
    file: Path = FILE_ARGUMENT,
    write: bool = WRITE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Format FILE with prettier."""
    result = CodemodFacade().format(str(file), mode="path")
    _emit_text(result, file, write, json_output)


@app.command("is-formatted")
def is_formatted_cmd(
    file: Path = FILE_ARGUMENT,
    json_output: bool = JSON_OPTION,
):
    """Check whether prettier would leave FILE unchanged."""
    result = CodemodFacade().is_formatted(str(file), mode="path")
    _emit_check(result, json_output)


@app.command("hide-scrollbar")
def hide_scrollbar_cmd(
    file: Path = FILE_ARGUMENT,
    write: bool = WRITE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Ensure the stylesheet has a `.hide-scrollbar { display: none; }` rule."""
    result = CodemodFacade().ensure_hide_scrollbar(str(file), mode="path")
    _emit_text(result, file, write, json_output)


if __name__ == "__main__":
    app()
