"""Upload collaborators: turn an uploaded PDF into a candidate document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from resume_editor.errors import ParseFailed

if TYPE_CHECKING:
    from resume_editor.clients.llm_client import LLMClient
    from resume_editor.config import AppConfig

logger = logging.getLogger(__name__)


class ResumeParser(Protocol):
    async def parse(self, payload: bytes, filename: str) -> dict[str, Any]:
        """Return a (possibly partial) candidate document or raise ParseFailed."""
        ...


def check_upload(payload: bytes, filename: str, max_upload_mb: int) -> None:
    """Reject uploads the parsers cannot handle."""
    if not filename or not filename.lower().endswith(".pdf"):
        raise ParseFailed("Only PDF files are accepted.")
    if not payload:
        raise ParseFailed("The uploaded file is empty.")
    if len(payload) > max_upload_mb * 1024 * 1024:
        raise ParseFailed(f"File too large. Max size: {max_upload_mb}MB")


class HTTPParseClient:
    """Posts the PDF as multipart form data to a remote parse endpoint."""

    def __init__(
        self,
        endpoint: str,
        *,
        field_name: str = "resume",
        timeout: float = 60.0,
        max_upload_mb: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint
        self.field_name = field_name
        self.timeout = timeout
        self.max_upload_mb = max_upload_mb
        self._transport = transport

    async def parse(self, payload: bytes, filename: str) -> dict[str, Any]:
        check_upload(payload, filename, self.max_upload_mb)
        files = {self.field_name: (filename, payload, "application/pdf")}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, files=files)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Parse endpoint returned %s", exc.response.status_code, exc_info=True)
            raise ParseFailed() from exc
        except httpx.RequestError as exc:
            logger.error("Parse endpoint unreachable: %s", self.endpoint, exc_info=True)
            raise ParseFailed() from exc
        except ValueError as exc:
            logger.error("Parse endpoint returned non-JSON body", exc_info=True)
            raise ParseFailed() from exc

        if not isinstance(data, dict):
            logger.error("Parse endpoint returned %s instead of an object", type(data).__name__)
            raise ParseFailed()
        return data


def build_parser(config: AppConfig, llm: LLMClient | None = None) -> ResumeParser:
    """Create the upload collaborator selected by ``config.parse.backend``."""
    backend = config.parse.backend
    if backend == "http":
        return HTTPParseClient(
            config.parse.endpoint,
            field_name=config.parse.field_name,
            timeout=config.parse.timeout,
            max_upload_mb=config.parse.max_upload_mb,
        )
    if backend == "llm":
        from resume_editor.clients.llm_client import LLMClient
        from resume_editor.parsers.resume_parser import LLMResumeParser

        if llm is None:
            llm = LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)
        return LLMResumeParser(
            llm,
            model=config.llm.model,
            max_tokens=config.llm.max_tokens,
            max_upload_mb=config.parse.max_upload_mb,
        )
    raise ValueError(f"Unknown parse backend: {backend}")
