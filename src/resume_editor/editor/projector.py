"""Derive the render-ready preview from a canonical document."""

from __future__ import annotations

from resume_editor.models.preview import HeaderBlock, PreviewEntry, PreviewSection, PreviewView
from resume_editor.models.resume import ResumeDocument

DEFAULT_SEPARATOR = " | "
DEFAULT_HEADINGS: dict[str, str] = {
    "experience": "Work Experience",
    "education": "Education",
    "skills": "Skills",
}


def project(
    doc: ResumeDocument,
    *,
    separator: str = DEFAULT_SEPARATOR,
    headings: dict[str, str] | None = None,
) -> PreviewView:
    """Build the preview: header, then experience, education and skills.

    Every section is present even when it has no entries.
    """
    headings = {**DEFAULT_HEADINGS, **(headings or {})}
    info = doc.personal_info
    contact = tuple(part for part in (info.email, info.phone) if part)
    header = HeaderBlock(
        name=info.name,
        contact=contact,
        contact_line=separator.join(contact),
    )

    experience = tuple(
        PreviewEntry(title=e.title, subtitle=e.company, body=e.description)
        for e in doc.experience
    )
    education = tuple(
        PreviewEntry(title=e.degree, subtitle=e.institution) for e in doc.education
    )
    skills = tuple(PreviewEntry(title=skill) for skill in doc.skills)

    return PreviewView(
        header=header,
        sections=(
            PreviewSection(key="experience", heading=headings["experience"], entries=experience),
            PreviewSection(key="education", heading=headings["education"], entries=education),
            PreviewSection(key="skills", heading=headings["skills"], entries=skills),
        ),
    )
