"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
import webbrowser
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from resume_editor.clients.parse_client import build_parser
from resume_editor.config import load_config
from resume_editor.editor.normalizer import default_document, normalize, normalize_with_report
from resume_editor.editor.projector import project
from resume_editor.editor.reducer import append_entry, apply_edit, remove_entry
from resume_editor.editor.session import EditorSession
from resume_editor.errors import OutOfRange
from resume_editor.models.edits import edit_intent
from resume_editor.models.preview import PreviewView
from resume_editor.models.resume import ResumeDocument
from resume_editor.templates.renderer import render_preview_html, save_html

app = typer.Typer(
    name="resume-editor",
    help="Resume document editor with live preview",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_candidate(file: Path) -> object:
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)
    try:
        return json.loads(file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        console.print(f"[red]Invalid JSON in {file}: {escape(str(exc))}[/red]")
        raise typer.Exit(1)


def _load_document(file: Path | None) -> ResumeDocument:
    if file is None:
        return default_document(load_config().editor.seed_blank_entries)
    return normalize(_read_candidate(file))


def _print_document(doc: ResumeDocument) -> None:
    console.print_json(data=doc.to_wire())


def _print_preview(view: PreviewView) -> None:
    header = view.header
    console.print(
        Panel(
            f"[bold]{escape(header.name) or '(no name)'}[/bold]\n{escape(header.contact_line)}",
            title="Live Preview",
        )
    )
    for section in view.sections:
        table = Table(title=escape(section.heading), show_header=False, expand=True)
        table.add_column("entry")
        for entry in section.entries:
            lines = [f"[bold]{escape(entry.title)}[/bold]"]
            if entry.subtitle:
                lines.append(f"[italic]{escape(entry.subtitle)}[/italic]")
            if entry.body:
                lines.append(escape(entry.body))
            table.add_row("\n".join(lines))
        if section.is_empty:
            table.add_row("[dim](empty)[/dim]")
        console.print(table)


@app.command("normalize")
def normalize_cmd(
    file: Path = typer.Argument(help="Candidate document (JSON)"),
) -> None:
    """Print the canonical form of a candidate document."""
    doc, notes = normalize_with_report(_read_candidate(file))
    for note in notes:
        console.print(f"[dim]coerced {escape(note.path)}: {escape(note.reason)}[/dim]", highlight=False)
    _print_document(doc)


@app.command()
def preview(
    file: Path = typer.Argument(help="Resume document (JSON)"),
    html: Path = typer.Option(None, "--html", help="Write an HTML preview to this path"),
    open_browser: bool = typer.Option(False, "--open", help="Open the HTML preview"),
) -> None:
    """Show the live preview of a document."""
    config = load_config()
    view = project(
        _load_document(file),
        separator=config.preview.separator,
        headings=config.preview.headings,
    )
    if html is None:
        _print_preview(view)
        return

    path = save_html(render_preview_html(view, title=config.preview.title), html)
    console.print(f"[green]HTML preview: {path}[/green]")
    if open_browser:
        webbrowser.open(path.resolve().as_uri())


@app.command()
def edit(
    file: Path = typer.Argument(help="Resume document (JSON)"),
    section: str = typer.Option(..., "--section", "-s", help="personalInfo, experience, education or skills"),
    field: str = typer.Option("", "--field", "-f", help="Field name (not used for skills)"),
    value: str = typer.Option(..., "--value", help="New value"),
    index: int = typer.Option(0, "--index", "-i", help="Entry index (sequences only)"),
) -> None:
    """Apply one field edit and print the resulting document."""
    doc = _load_document(file)
    try:
        intent = edit_intent(section, index, field, value)
        doc = apply_edit(doc, intent)
    except ValidationError as exc:
        console.print(f"[red]Invalid edit: {exc.errors()[0]['msg']}[/red]")
        raise typer.Exit(1)
    except OutOfRange as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    _print_document(doc)


@app.command()
def append(
    file: Path = typer.Argument(help="Resume document (JSON)"),
    section: str = typer.Argument(help="experience, education or skills"),
) -> None:
    """Append a blank entry to a section."""
    try:
        doc = append_entry(_load_document(file), section)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    _print_document(doc)


@app.command()
def remove(
    file: Path = typer.Argument(help="Resume document (JSON)"),
    section: str = typer.Argument(help="experience, education or skills"),
    index: int = typer.Argument(help="Entry index"),
) -> None:
    """Remove one entry from a section."""
    try:
        doc = remove_entry(_load_document(file), section, index)
    except (ValueError, OutOfRange) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    _print_document(doc)


@app.command()
def parse(
    resume: Path = typer.Argument(help="Resume PDF to upload"),
    current: Path = typer.Option(None, "--current", "-c", help="Document to merge into (JSON)"),
    backend: str = typer.Option(None, "--backend", "-b", help="Parse backend: http or llm"),
) -> None:
    """Upload a PDF, merge the parsed fields and print the document."""
    if not resume.exists():
        console.print(f"[red]File not found: {resume}[/red]")
        raise typer.Exit(1)

    config = load_config()
    try:
        if backend is not None:
            config = replace(config, parse=replace(config.parse, backend=backend))
        parser = build_parser(config)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    session = EditorSession(
        _load_document(current),
        separator=config.preview.separator,
        headings=config.preview.headings,
    )
    with console.status("Analyzing your resume..."):
        ok = asyncio.run(session.upload(parser, resume.read_bytes(), resume.name))

    if not ok:
        console.print(f"[red]{escape(session.error or '')}[/red]")
        raise typer.Exit(1)
    _print_document(session.document)


if __name__ == "__main__":
    app()
