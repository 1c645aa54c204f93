"""LLM-backed resume parser: PDF text via PyMuPDF, fields via Claude."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from resume_editor.clients.llm_client import DEFAULT_MODEL, LLMClient
from resume_editor.clients.parse_client import check_upload
from resume_editor.errors import ParseFailed

logger = logging.getLogger(__name__)

MAX_PROMPT_CHARS = 20000

SCHEMA_EXAMPLE = {
    "personalInfo": {"name": "", "email": "", "phone": ""},
    "experience": [{"title": "", "company": "", "description": ""}],
    "education": [{"degree": "", "institution": ""}],
    "skills": [""],
}

SYSTEM_PROMPT = (
    "You extract structured data from resumes. Reply with a single JSON object "
    "and nothing else. Omit a top-level key entirely when the resume has no "
    "such section."
)


def extract_pdf_text(payload: bytes) -> str:
    """Return the plain text of every page in a PDF."""
    import fitz  # pymupdf

    doc = fitz.open(stream=payload, filetype="pdf")
    try:
        return "\n".join(page.get_text() for page in doc)
    finally:
        doc.close()


def clean_text(text: str) -> str:
    """Strip extraction artifacts: zero-width characters, runs of spaces, blank-line runs."""
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)
    text = re.sub(r"^(\s*)[●•◦◆■▪★○]\s*", r"\1- ", text, flags=re.MULTILINE)
    lines = [re.sub(r"[ \t]{2,}", " ", line).rstrip() for line in text.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def build_prompt(resume_text: str) -> str:
    return (
        "Extract the resume below into JSON with exactly this shape:\n"
        f"{json.dumps(SCHEMA_EXAMPLE, indent=2)}\n\n"
        "Keep experience and education in the order they appear. Use the "
        "full text of each role's responsibilities as its description.\n\n"
        f"## Resume\n{resume_text[:MAX_PROMPT_CHARS]}"
    )


class LLMResumeParser:
    """Upload collaborator that parses PDFs locally with Claude."""

    def __init__(
        self,
        llm: LLMClient,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
        max_upload_mb: int = 5,
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens
        self.max_upload_mb = max_upload_mb

    async def parse(self, payload: bytes, filename: str) -> dict[str, Any]:
        check_upload(payload, filename, self.max_upload_mb)
        try:
            text = clean_text(extract_pdf_text(payload))
        except Exception as exc:
            logger.error("Could not read PDF %s", filename, exc_info=True)
            raise ParseFailed("Could not read the PDF file.") from exc
        if not text:
            raise ParseFailed("No text could be extracted from the PDF.")

        logger.info("Parsing %s (%d chars) with %s", filename, len(text), self.model)
        try:
            return await self.llm.generate_json(
                build_prompt(text),
                system=SYSTEM_PROMPT,
                model=self.model,
                max_tokens=self.max_tokens,
            )
        except ValueError as exc:
            logger.error("Model output for %s was not a JSON object", filename)
            raise ParseFailed() from exc
        except Exception as exc:
            # anthropic.APIError and transport errors
            raise ParseFailed() from exc
