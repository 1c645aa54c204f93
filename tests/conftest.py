"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from resume_editor.clients.llm_client import LLMClient, LLMResponse
from resume_editor.editor.normalizer import default_document
from resume_editor.models.resume import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
)


@pytest.fixture
def blank_document() -> ResumeDocument:
    return default_document()


@pytest.fixture
def sample_document() -> ResumeDocument:
    return ResumeDocument(
        personal_info=PersonalInfo(name="Alex Kim", email="alex@example.com", phone="555-0100"),
        experience=(
            ExperienceEntry(title="Backend Engineer", company="Acme", description="APIs"),
            ExperienceEntry(title="Intern", company="Initech", description="Reports"),
        ),
        education=(EducationEntry(degree="BSc Computer Science", institution="State University"),),
        skills=("Python", "SQL", "Python"),
    )


@pytest.fixture
def jane_parse() -> dict:
    """Parse result for a PDF that only yielded contact info and one role."""
    return {
        "personalInfo": {"name": "Jane Doe", "email": "j@x.com", "phone": ""},
        "experience": [
            {"title": "Dev", "company": "Acme", "description": "Built things"},
        ],
    }


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    return client
