"""Total normalization of candidate documents into the canonical shape.

Candidates come from untrusted parsers and form payloads. Normalization never
fails: anything that does not fit the schema degrades to the empty default for
that field, and each such degradation is recorded as a ``ValidationCoerced``
note so callers can log it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from resume_editor.models.resume import (
    ENTRY_FIELDS,
    ENTRY_MODELS,
    PERSONAL_INFO_FIELDS,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationCoerced:
    """A non-fatal shape fix applied during normalization."""

    path: str
    reason: str


def default_document(seed_blank_entries: bool = True) -> ResumeDocument:
    """Session-start document, seeded with one blank experience and education entry."""
    if not seed_blank_entries:
        return ResumeDocument()
    return ResumeDocument(
        experience=(ExperienceEntry(),),
        education=(EducationEntry(),),
    )


def normalize(candidate: Any) -> ResumeDocument:
    """Coerce any candidate into a total ``ResumeDocument``."""
    document, notes = normalize_with_report(candidate)
    if notes:
        logger.info(
            "Normalized candidate with %d coercion(s): %s",
            len(notes),
            ", ".join(f"{n.path} ({n.reason})" for n in notes[:5]),
        )
    return document


def normalize_with_report(
    candidate: Any,
) -> tuple[ResumeDocument, list[ValidationCoerced]]:
    """Like :func:`normalize`, also returning the coercions that were applied."""
    if isinstance(candidate, ResumeDocument):
        return candidate, []

    notes: list[ValidationCoerced] = []
    if not isinstance(candidate, Mapping):
        notes.append(ValidationCoerced("$", f"expected object, got {_type_name(candidate)}"))
        return ResumeDocument(), notes

    document = ResumeDocument(
        personal_info=normalize_personal_info(candidate.get("personalInfo"), notes),
        experience=normalize_entries("experience", candidate.get("experience"), notes),
        education=normalize_entries("education", candidate.get("education"), notes),
        skills=normalize_skills(candidate.get("skills"), notes),
    )
    return document, notes


def normalize_personal_info(
    raw: Any, notes: list[ValidationCoerced] | None = None
) -> PersonalInfo:
    notes = notes if notes is not None else []
    if raw is None:
        return PersonalInfo()
    if isinstance(raw, PersonalInfo):
        return raw
    if not isinstance(raw, Mapping):
        notes.append(ValidationCoerced("personalInfo", f"expected object, got {_type_name(raw)}"))
        return PersonalInfo()
    values = _string_fields(raw, PERSONAL_INFO_FIELDS, "personalInfo", notes)
    return PersonalInfo(**values)


def normalize_entries(
    section: str, raw: Any, notes: list[ValidationCoerced] | None = None
) -> tuple:
    """Normalize one entry sequence (``experience`` or ``education``).

    Entries that are not objects are dropped; order of the rest is kept.
    """
    notes = notes if notes is not None else []
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        notes.append(ValidationCoerced(section, f"expected list, got {_type_name(raw)}"))
        return ()

    model = ENTRY_MODELS[section]
    fields = ENTRY_FIELDS[section]
    entries = []
    for i, item in enumerate(raw):
        path = f"{section}[{i}]"
        if isinstance(item, model):
            entries.append(item)
            continue
        if not isinstance(item, Mapping):
            notes.append(ValidationCoerced(path, f"dropped {_type_name(item)} entry"))
            continue
        entries.append(model(**_string_fields(item, fields, path, notes)))
    return tuple(entries)


def normalize_skills(raw: Any, notes: list[ValidationCoerced] | None = None) -> tuple[str, ...]:
    """Keep string skills verbatim and in order; duplicates are allowed."""
    notes = notes if notes is not None else []
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        notes.append(ValidationCoerced("skills", f"expected list, got {_type_name(raw)}"))
        return ()
    skills = []
    for i, item in enumerate(raw):
        if isinstance(item, str):
            skills.append(item)
        else:
            notes.append(ValidationCoerced(f"skills[{i}]", f"dropped {_type_name(item)} skill"))
    return tuple(skills)


def _string_fields(
    raw: Mapping,
    fields: tuple[str, ...],
    path: str,
    notes: list[ValidationCoerced],
) -> dict[str, str]:
    values: dict[str, str] = {}
    for name in fields:
        value = raw.get(name)
        if isinstance(value, str):
            values[name] = value
        else:
            values[name] = ""
            reason = "missing" if value is None else f"{_type_name(value)} blanked"
            notes.append(ValidationCoerced(f"{path}.{name}", reason))
    for extra in sorted(str(k) for k in raw if k not in fields):
        notes.append(ValidationCoerced(f"{path}.{extra}", "unknown field dropped"))
    return values


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__
