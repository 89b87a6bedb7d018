"""quickref-lint — command-line front end for the cheat sheet linter."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from quickref.core.content import cheatsheet_text
from quickref.core.doc_lint import LintReport, lint_document, summarize
from quickref.core.domain_types import LintSeverity
from quickref.core.markdown_doc import Document, parse_document

app = typer.Typer(no_args_is_help=True, help="Integrity checks for the FastAPI cheat sheet.")

_console = Console()


class OutputFormat(str, Enum):
    table = "table"
    json = "json"


def _load(path: Optional[Path]) -> Document:
    if path is None:
        return parse_document(cheatsheet_text())
    if not path.is_file():
        _console.print(f"[red]No such file:[/red] {path}")
        raise typer.Exit(code=2)
    return parse_document(path.read_text(encoding="utf-8"))


def _render_table(report: LintReport, source: str) -> None:
    if not report.issues:
        _console.print(f"[bright_green]OK[/bright_green] {source}: no issues")
        return

    table = Table(title=f"Lint: {source}")
    table.add_column("Line", justify="right", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Message", style="white")
    for issue in report.issues:
        style = "red" if issue.severity == LintSeverity.ERROR else "yellow"
        table.add_row(
            str(issue.line), f"[{style}]{issue.severity.value}[/{style}]",
            issue.rule, issue.message,
        )
    _console.print(table)
    counts = ", ".join(f"{rule}={n}" for rule, n in sorted(summarize(report).items()))
    _console.print(
        f"{len(report.errors)} error(s), {len(report.warnings)} warning(s) [dim]({counts})[/dim]"
    )


@app.command()
def check(
    path: Optional[Path] = typer.Argument(None, help="Markdown file; defaults to the shipped cheat sheet."),
    docs_url: str = typer.Option("/docs", help="Expected Swagger UI path."),
    redoc_url: str = typer.Option("/redoc", help="Expected ReDoc path."),
    output: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
    strict: bool = typer.Option(False, help="Treat warnings as failures."),
) -> None:
    """Lint a cheat sheet and exit non-zero when it has errors."""

    doc = _load(path)
    report = lint_document(doc, docs_url=docs_url, redoc_url=redoc_url)
    source = str(path) if path else "cheatsheet.md (bundled)"

    if output is OutputFormat.json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _render_table(report, source)

    failed = not report.ok or (strict and report.warnings)
    raise typer.Exit(code=1 if failed else 0)


@app.command()
def sections(
    path: Optional[Path] = typer.Argument(None, help="Markdown file; defaults to the shipped cheat sheet."),
) -> None:
    """List the document's sections and how many code blocks each has."""

    doc = _load(path)
    table = Table(title=doc.title or "Untitled")
    table.add_column("Line", justify="right")
    table.add_column("Section", style="bright_green")
    table.add_column("Code blocks", justify="right")
    for section in doc.sections:
        table.add_row(str(section.line), section.title, str(len(section.code_blocks)))
    _console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
