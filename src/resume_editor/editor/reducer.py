"""Field-level edits on the canonical document.

Every operation returns a new ``ResumeDocument``; untouched sections and
entries are shared with the input. Sequences never grow or shrink as a side
effect of an edit: use ``append_entry`` / ``remove_entry``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from resume_editor.errors import OutOfRange
from resume_editor.models.edits import EditIntent, PersonalInfoEdit, SequenceEdit, SkillEdit
from resume_editor.models.resume import ENTRY_MODELS, ResumeDocument, SectionKey

logger = logging.getLogger(__name__)


def apply_edit(doc: ResumeDocument, intent: EditIntent) -> ResumeDocument:
    """Apply one edit intent and return the next document version."""
    if isinstance(intent, PersonalInfoEdit):
        logger.debug("personalInfo.%s edited", intent.field)
        info = doc.personal_info.model_copy(update={intent.field: intent.value})
        return doc.model_copy(update={"personal_info": info})

    if isinstance(intent, SequenceEdit):
        entries = getattr(doc, intent.section)
        _check_index(intent.section, intent.index, len(entries))
        logger.debug("%s[%d].%s edited", intent.section, intent.index, intent.field)
        entry = entries[intent.index].model_copy(update={intent.field: intent.value})
        return doc.model_copy(
            update={intent.section: _replace_at(entries, intent.index, entry)}
        )

    if isinstance(intent, SkillEdit):
        _check_index("skills", intent.index, len(doc.skills))
        logger.debug("skills[%d] edited", intent.index)
        return doc.model_copy(
            update={"skills": _replace_at(doc.skills, intent.index, intent.value)}
        )

    raise TypeError(f"Unsupported edit intent: {type(intent).__name__}")


def append_entry(doc: ResumeDocument, section: SectionKey) -> ResumeDocument:
    """Append a blank entry (an empty string for ``skills``)."""
    blank = "" if section == "skills" else _entry_model(section)()
    entries = getattr(doc, section)
    logger.debug("%s: appended entry %d", section, len(entries))
    return doc.model_copy(update={section: (*entries, blank)})


def remove_entry(doc: ResumeDocument, section: SectionKey, index: int) -> ResumeDocument:
    """Remove one entry; the remaining entries keep their order."""
    entries = getattr(doc, _checked_section(section))
    _check_index(section, index, len(entries))
    logger.debug("%s: removed entry %d", section, index)
    return doc.model_copy(update={section: entries[:index] + entries[index + 1:]})


def replay(doc: ResumeDocument, intents: Iterable[EditIntent]) -> ResumeDocument:
    """Fold a sequence of intents over ``doc``."""
    for intent in intents:
        doc = apply_edit(doc, intent)
    return doc


def _check_index(section: str, index: int, length: int) -> None:
    if not 0 <= index < length:
        raise OutOfRange(section, index, length)


def _checked_section(section: str) -> str:
    if section != "skills" and section not in ENTRY_MODELS:
        raise ValueError(f"Unknown section: {section!r}")
    return section


def _entry_model(section: str):
    return ENTRY_MODELS[_checked_section(section)]


def _replace_at(entries: tuple, index: int, value) -> tuple:
    return entries[:index] + (value,) + entries[index + 1:]
