"""Error types raised by the editor core and its collaborators."""

from __future__ import annotations

DEFAULT_PARSE_ERROR = "Failed to parse resume. Please check the file and try again."


class ResumeEditorError(Exception):
    """Base class for resume-editor errors."""


class ParseFailed(ResumeEditorError):
    """The upload collaborator returned an error or an unusable response."""

    def __init__(self, message: str = DEFAULT_PARSE_ERROR):
        super().__init__(message)
        self.message = message


class OutOfRange(ResumeEditorError, IndexError):
    """An edit referenced an entry index that does not exist."""

    def __init__(self, section: str, index: int, length: int):
        super().__init__(
            f"{section}[{index}] is out of range (section has {length} entries)"
        )
        self.section = section
        self.index = index
        self.length = length


class UploadInProgress(ResumeEditorError):
    """A parse request is already in flight for this session."""
