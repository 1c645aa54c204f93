"""Data models for the resume editor."""

from resume_editor.models.edits import (
    EditIntent,
    PersonalInfoEdit,
    SequenceEdit,
    SkillEdit,
    edit_intent,
    parse_intent,
)
from resume_editor.models.preview import (
    HeaderBlock,
    PreviewEntry,
    PreviewSection,
    PreviewView,
)
from resume_editor.models.resume import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
)

__all__ = [
    "EditIntent",
    "EducationEntry",
    "ExperienceEntry",
    "HeaderBlock",
    "PersonalInfo",
    "PersonalInfoEdit",
    "PreviewEntry",
    "PreviewSection",
    "PreviewView",
    "ResumeDocument",
    "SequenceEdit",
    "SkillEdit",
    "edit_intent",
    "parse_intent",
]
