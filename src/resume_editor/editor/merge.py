"""Merge a freshly parsed candidate into the current document."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from resume_editor.editor.normalizer import normalize
from resume_editor.models.resume import TOP_LEVEL_KEYS, ResumeDocument

logger = logging.getLogger(__name__)


def parsed_sections(parsed: Any) -> tuple[str, ...]:
    """Wire keys of ``parsed`` that will replace the current document's value.

    A key counts only when present with a non-null value.
    """
    if not isinstance(parsed, Mapping):
        return ()
    return tuple(key for key in TOP_LEVEL_KEYS if parsed.get(key) is not None)


def merge_parsed(current: ResumeDocument, parsed: Any) -> ResumeDocument:
    """Replace every section the parse recognized; keep the rest of ``current``.

    Replacement is per top-level key and wholesale: a parsed ``experience`` list
    replaces the whole current list, it is not merged entry by entry.
    """
    replaced = parsed_sections(parsed)
    if not replaced:
        logger.info("Parse result recognized no sections; document kept")
        return normalize(current)

    incoming = normalize(parsed)
    update = {TOP_LEVEL_KEYS[key]: getattr(incoming, TOP_LEVEL_KEYS[key]) for key in replaced}
    logger.info("Merging parsed sections: %s", ", ".join(replaced))
    return normalize(current.model_copy(update=update))
