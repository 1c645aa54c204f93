"""Pydantic models for the canonical résumé document."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SequenceSection = Literal["experience", "education"]
SectionKey = Literal["experience", "education", "skills"]

PERSONAL_INFO_FIELDS: tuple[str, ...] = ("name", "email", "phone")
ENTRY_FIELDS: dict[str, tuple[str, ...]] = {
    "experience": ("title", "company", "description"),
    "education": ("degree", "institution"),
}
# Wire key -> python attribute
TOP_LEVEL_KEYS: dict[str, str] = {
    "personalInfo": "personal_info",
    "experience": "experience",
    "education": "education",
    "skills": "skills",
}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class PersonalInfo(_Frozen):
    name: str = ""
    email: str = ""
    phone: str = ""


class ExperienceEntry(_Frozen):
    title: str = ""
    company: str = ""
    description: str = ""


class EducationEntry(_Frozen):
    degree: str = ""
    institution: str = ""


ENTRY_MODELS: dict[str, type[_Frozen]] = {
    "experience": ExperienceEntry,
    "education": EducationEntry,
}


class ResumeDocument(_Frozen):
    """One version of the canonical document. Replaced, never mutated."""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias="personalInfo")
    experience: tuple[ExperienceEntry, ...] = ()
    education: tuple[EducationEntry, ...] = ()
    skills: tuple[str, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        """Return the camelCase JSON-ready shape used by parsers and forms."""
        return self.model_dump(mode="json", by_alias=True)
