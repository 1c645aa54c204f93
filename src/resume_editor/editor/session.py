"""Editor session: owns the canonical document and keeps the preview in sync."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from resume_editor.editor.merge import merge_parsed, parsed_sections
from resume_editor.editor.normalizer import default_document
from resume_editor.editor.projector import DEFAULT_HEADINGS, DEFAULT_SEPARATOR, project
from resume_editor.editor.reducer import append_entry, apply_edit, remove_entry
from resume_editor.errors import DEFAULT_PARSE_ERROR, ParseFailed, UploadInProgress
from resume_editor.models.edits import EditIntent
from resume_editor.models.preview import PreviewView
from resume_editor.models.resume import ResumeDocument, SectionKey

if TYPE_CHECKING:
    from resume_editor.clients.parse_client import ResumeParser

logger = logging.getLogger(__name__)

Listener = Callable[[ResumeDocument, PreviewView], None]


class SessionState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"


class EditorSession:
    """Single-user editing session.

    All transitions run synchronously and replace ``document`` wholesale. The
    only asynchronous step is the parse request in :meth:`upload`; edits stay
    allowed while it is in flight, uploads do not.
    """

    def __init__(
        self,
        document: ResumeDocument | None = None,
        *,
        separator: str = DEFAULT_SEPARATOR,
        headings: dict[str, str] | None = None,
    ):
        self.separator = separator
        self.headings = dict(headings or DEFAULT_HEADINGS)
        self.document = document if document is not None else default_document()
        self.version = 0
        self.state = SessionState.IDLE
        self.error: str | None = None
        self.preview = self._project(self.document)
        self._listeners: list[Listener] = []
        # section wire key -> version of the last commit that touched it
        self._touched: dict[str, int] = {}
        self._upload_version: int | None = None

    @property
    def is_loading(self) -> bool:
        return self.state is SessionState.LOADING

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(document, preview)`` after every commit. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- edits ---------------------------------------------------------------

    def apply(self, intent: EditIntent) -> ResumeDocument:
        return self._commit(apply_edit(self.document, intent), (_intent_section(intent),))

    def append_entry(self, section: SectionKey) -> ResumeDocument:
        return self._commit(append_entry(self.document, section), (section,))

    def remove_entry(self, section: SectionKey, index: int) -> ResumeDocument:
        return self._commit(remove_entry(self.document, section, index), (section,))

    # -- upload --------------------------------------------------------------

    def begin_upload(self) -> None:
        if self.is_loading:
            raise UploadInProgress("A resume is already being parsed")
        self.state = SessionState.LOADING
        self.error = None
        self._upload_version = self.version

    def complete_upload(self, parsed: object) -> ResumeDocument:
        """Merge a parse result into whatever the document is now."""
        replaced = parsed_sections(parsed)
        started = self._upload_version
        clobbered = [
            key for key in replaced
            if started is not None and self._touched.get(key, -1) > started
        ]
        if clobbered:
            logger.warning(
                "Parse result overwrites edits made while it was in flight: %s",
                ", ".join(clobbered),
            )
        try:
            return self._commit(merge_parsed(self.document, parsed), replaced)
        finally:
            self._finish_upload()

    def fail_upload(self, message: str) -> None:
        logger.info("Upload failed: %s", message)
        self.error = message
        self._finish_upload()

    async def upload(self, parser: ResumeParser, payload: bytes, filename: str) -> bool:
        """Parse ``payload`` with ``parser`` and merge the result.

        Returns False when the collaborator reported ``ParseFailed`` or returned
        something other than an object; the document is then unchanged and
        ``error`` holds the message.
        """
        self.begin_upload()
        try:
            parsed = await parser.parse(payload, filename)
        except ParseFailed as exc:
            self.fail_upload(exc.message)
            return False
        except BaseException:
            self._finish_upload()
            raise
        if not isinstance(parsed, Mapping):
            logger.warning("Parser returned %s instead of an object", type(parsed).__name__)
            self.fail_upload(DEFAULT_PARSE_ERROR)
            return False
        self.complete_upload(parsed)
        logger.info("Upload of %s merged at version %d", filename, self.version)
        return True

    # -- internals -----------------------------------------------------------

    def _finish_upload(self) -> None:
        self.state = SessionState.IDLE
        self._upload_version = None

    def _project(self, document: ResumeDocument) -> PreviewView:
        return project(document, separator=self.separator, headings=self.headings)

    def _commit(self, document: ResumeDocument, sections: tuple[str, ...]) -> ResumeDocument:
        self.document = document
        self.version += 1
        for key in sections:
            self._touched[key] = self.version
        self.preview = self._project(document)
        for listener in list(self._listeners):
            listener(document, self.preview)
        return document


def _intent_section(intent: EditIntent) -> str:
    if intent.kind == "personal_info":
        return "personalInfo"
    if intent.kind == "skill":
        return "skills"
    return intent.section
