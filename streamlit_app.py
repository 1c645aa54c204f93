"""Streamlit Web UI for resume-editor.

Left column: PDF upload plus editor forms. Right column: live preview.
Every widget change is dispatched to the EditorSession as an edit intent from
a callback, so the preview is always derived from the canonical document.
"""

from __future__ import annotations

import asyncio
import logging

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

from resume_editor.clients.parse_client import build_parser
from resume_editor.config import load_config
from resume_editor.editor.normalizer import default_document
from resume_editor.editor.session import EditorSession
from resume_editor.errors import OutOfRange
from resume_editor.models.edits import edit_intent
from resume_editor.models.resume import ENTRY_FIELDS, PERSONAL_INFO_FIELDS, ResumeDocument
from resume_editor.templates.renderer import render_preview_html

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "name": "Full Name",
    "email": "Email",
    "phone": "Phone",
    "title": "Job Title",
    "company": "Company",
    "description": "Description",
    "degree": "Degree",
    "institution": "Institution",
}

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume Editor",
    page_icon=":page_facing_up:",
    layout="wide",
)

config = load_config()


def _widget_key(section: str, index: int, field: str) -> str:
    return f"{section}.{index}.{field}"


def _sync_widgets(doc: ResumeDocument) -> None:
    """Push document values into widget state after a structural change."""
    for name in PERSONAL_INFO_FIELDS:
        st.session_state[_widget_key("personalInfo", 0, name)] = getattr(doc.personal_info, name)
    for section, fields in ENTRY_FIELDS.items():
        for i, entry in enumerate(getattr(doc, section)):
            for name in fields:
                st.session_state[_widget_key(section, i, name)] = getattr(entry, name)
    for i, skill in enumerate(doc.skills):
        st.session_state[_widget_key("skills", i, "")] = skill


def _get_session() -> EditorSession:
    if "editor" not in st.session_state:
        session = EditorSession(
            default_document(config.editor.seed_blank_entries),
            separator=config.preview.separator,
            headings=config.preview.headings,
        )
        _sync_widgets(session.document)
        st.session_state.editor = session
    return st.session_state.editor


session = _get_session()

# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


def _on_field_change(section: str, index: int, field: str) -> None:
    value = st.session_state[_widget_key(section, index, field)]
    try:
        session.apply(edit_intent(section, index, field, value))
    except OutOfRange:
        logger.exception("Form referenced a missing entry")


def _on_append(section: str) -> None:
    _sync_widgets(session.append_entry(section))


def _on_remove(section: str, index: int) -> None:
    _sync_widgets(session.remove_entry(section, index))


def _on_upload() -> None:
    uploaded = st.session_state.get("upload")
    if uploaded is None or session.is_loading:
        return
    parser = build_parser(config)
    ok = asyncio.run(session.upload(parser, uploaded.getvalue(), uploaded.name))
    if ok:
        _sync_widgets(session.document)


# ---------------------------------------------------------------------------
# Editor forms
# ---------------------------------------------------------------------------


def _text_field(section: str, index: int, field: str, *, area: bool = False) -> None:
    widget = st.text_area if area else st.text_input
    widget(
        FIELD_LABELS.get(field, field.title()),
        key=_widget_key(section, index, field),
        on_change=_on_field_change,
        args=(section, index, field),
    )


def _entry_section(section: str, heading: str, add_label: str) -> None:
    st.subheader(heading)
    entries = getattr(session.document, section)
    for i in range(len(entries)):
        with st.container(border=True):
            for field in ENTRY_FIELDS[section]:
                _text_field(section, i, field, area=field == "description")
            st.button("Remove", key=f"remove.{section}.{i}", on_click=_on_remove, args=(section, i))
    st.button(add_label, key=f"append.{section}", on_click=_on_append, args=(section,))


def _editor() -> None:
    st.header("Resume Editor")

    st.subheader("Upload Existing Resume")
    st.caption("Upload a PDF and we'll automatically fill in the editor for you.")
    st.file_uploader(
        "Resume PDF",
        type=["pdf"],
        key="upload",
        on_change=_on_upload,
        disabled=session.is_loading,
    )
    if session.is_loading:
        st.info("Analyzing your resume...")
    if session.error:
        st.error(session.error)

    st.divider()
    st.subheader("Personal Information")
    for field in PERSONAL_INFO_FIELDS:
        _text_field("personalInfo", 0, field)

    _entry_section("experience", "Work Experience", "Add experience")
    _entry_section("education", "Education", "Add education")

    st.subheader("Skills")
    for i in range(len(session.document.skills)):
        cols = st.columns([5, 1])
        with cols[0]:
            st.text_input(
                f"Skill {i + 1}",
                key=_widget_key("skills", i, ""),
                on_change=_on_field_change,
                args=("skills", i, ""),
                label_visibility="collapsed",
            )
        with cols[1]:
            st.button("Remove", key=f"remove.skills.{i}", on_click=_on_remove, args=("skills", i))
    st.button("Add skill", key="append.skills", on_click=_on_append, args=("skills",))


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

editor_col, preview_col = st.columns(2, gap="large")

with editor_col:
    _editor()

with preview_col:
    st.header("Live Preview")
    st.html(render_preview_html(session.preview, standalone=False))
