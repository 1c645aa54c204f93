"""Document normalization, merge, edit and preview logic."""

from resume_editor.editor.merge import merge_parsed
from resume_editor.editor.normalizer import (
    ValidationCoerced,
    default_document,
    normalize,
    normalize_with_report,
)
from resume_editor.editor.projector import project
from resume_editor.editor.reducer import append_entry, apply_edit, remove_entry, replay
from resume_editor.editor.session import EditorSession, SessionState

__all__ = [
    "EditorSession",
    "SessionState",
    "ValidationCoerced",
    "append_entry",
    "apply_edit",
    "default_document",
    "merge_parsed",
    "normalize",
    "normalize_with_report",
    "project",
    "remove_entry",
    "replay",
]
