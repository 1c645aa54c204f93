"""Tests for the typer CLI."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from resume_editor.cli import app
from resume_editor.errors import ParseFailed

runner = CliRunner()


@pytest.fixture
def doc_file(tmp_path, sample_document):
    path = tmp_path / "resume.json"
    path.write_text(json.dumps(sample_document.to_wire()), encoding="utf-8")
    return path


def _json_output(result) -> dict:
    return json.loads(result.stdout[result.stdout.index("{"):])


class TestNormalizeCommand:
    def test_prints_canonical_document(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text('{"personalInfo": {"name": "X"}, "experience": [{"title": "Dev", "pay": 1}]}')
        result = runner.invoke(app, ["normalize", str(path)])
        assert result.exit_code == 0
        assert "experience[0].pay" in result.stdout
        assert '"company": ""' in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["normalize", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["normalize", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"personalInfo": {"name": "Ren\xe9"}}')
        result = runner.invoke(app, ["normalize", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout


class TestEditCommands:
    def test_edit_sequence_field(self, doc_file):
        result = runner.invoke(
            app,
            ["edit", str(doc_file), "--section", "experience", "--index", "1", "--field", "title", "--value", "Analyst"],
        )
        assert result.exit_code == 0
        data = _json_output(result)
        assert data["experience"][1]["title"] == "Analyst"
        assert data["experience"][0]["title"] == "Backend Engineer"

    def test_edit_personal_info(self, doc_file):
        result = runner.invoke(app, ["edit", str(doc_file), "-s", "personalInfo", "-f", "name", "--value", "Sam"])
        assert result.exit_code == 0
        assert _json_output(result)["personalInfo"]["name"] == "Sam"

    def test_edit_out_of_range(self, doc_file):
        result = runner.invoke(
            app,
            ["edit", str(doc_file), "-s", "experience", "-i", "5", "-f", "title", "--value", "x"],
        )
        assert result.exit_code == 1
        assert "out of range" in result.stdout

    def test_edit_unknown_field(self, doc_file):
        result = runner.invoke(app, ["edit", str(doc_file), "-s", "education", "-f", "gpa", "--value", "4"])
        assert result.exit_code == 1
        assert "Invalid edit" in result.stdout

    def test_append_and_remove(self, doc_file):
        result = runner.invoke(app, ["append", str(doc_file), "education"])
        assert result.exit_code == 0
        assert len(_json_output(result)["education"]) == 2

        result = runner.invoke(app, ["remove", str(doc_file), "skills", "0"])
        assert result.exit_code == 0
        assert _json_output(result)["skills"] == ["SQL", "Python"]

    def test_remove_out_of_range(self, doc_file):
        result = runner.invoke(app, ["remove", str(doc_file), "education", "3"])
        assert result.exit_code == 1


class TestPreviewCommand:
    def test_terminal_preview(self, doc_file):
        result = runner.invoke(app, ["preview", str(doc_file)])
        assert result.exit_code == 0
        assert "Alex Kim" in result.stdout
        assert "Work Experience" in result.stdout

    def test_html_preview(self, doc_file, tmp_path):
        out = tmp_path / "preview.html"
        result = runner.invoke(app, ["preview", str(doc_file), "--html", str(out)])
        assert result.exit_code == 0
        assert "Alex Kim" in out.read_text(encoding="utf-8")

    def test_bracketed_text_printed_literally(self, tmp_path):
        path = tmp_path / "brackets.json"
        path.write_text(
            json.dumps({
                "personalInfo": {"name": "[red]Sam[/red]"},
                "experience": [{"title": "Dev [x]", "company": "Acme", "description": "Shipped [/b] tooling"}],
            }),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["preview", str(path)])
        assert result.exit_code == 0
        assert "Shipped [/b] tooling" in result.stdout
        assert "[red]Sam[/red]" in result.stdout
        assert "Dev [x]" in result.stdout


class TestParseCommand:
    def test_merges_parse_result(self, tmp_path, doc_file, jane_parse):
        pdf = tmp_path / "cv.pdf"
        pdf.write_bytes(b"%PDF-1.4")
        with patch("resume_editor.clients.parse_client.HTTPParseClient.parse", new=AsyncMock(return_value=jane_parse)):
            result = runner.invoke(app, ["parse", str(pdf), "--current", str(doc_file)])
        assert result.exit_code == 0
        data = _json_output(result)
        assert data["personalInfo"]["name"] == "Jane Doe"
        assert data["experience"] == [{"title": "Dev", "company": "Acme", "description": "Built things"}]
        assert data["skills"] == ["Python", "SQL", "Python"]

    def test_parse_failure(self, tmp_path):
        pdf = tmp_path / "cv.pdf"
        pdf.write_bytes(b"%PDF-1.4")
        failing = AsyncMock(side_effect=ParseFailed("Failed to parse resume."))
        with patch("resume_editor.clients.parse_client.HTTPParseClient.parse", new=failing):
            result = runner.invoke(app, ["parse", str(pdf)])
        assert result.exit_code == 1
        assert "Failed to parse resume." in result.stdout

    def test_unknown_backend(self, tmp_path):
        pdf = tmp_path / "cv.pdf"
        pdf.write_bytes(b"%PDF-1.4")
        result = runner.invoke(app, ["parse", str(pdf), "--backend", "ocr"])
        assert result.exit_code == 1
        assert "parse.backend" in result.stdout
