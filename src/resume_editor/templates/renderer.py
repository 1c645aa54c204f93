"""Render a PreviewView to HTML for the live preview pane."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from resume_editor.models.preview import PreviewView

TEMPLATES_DIR = Path(__file__).parent

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_preview_html(view: PreviewView, title: str = "Resume", *, standalone: bool = True) -> str:
    """Render the preview. ``standalone=False`` returns only the body fragment."""
    template = _env.get_template("preview.html")
    return template.render(view=view, title=title, standalone=standalone)


def save_html(html_content: str, output_path: str | Path) -> Path:
    """Save HTML content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html_content, encoding="utf-8")
    return path
