"""Tests for field edits and explicit sequence resizing."""

import pytest

from resume_editor.editor.reducer import append_entry, apply_edit, remove_entry, replay
from resume_editor.errors import OutOfRange
from resume_editor.models.edits import PersonalInfoEdit, SequenceEdit, SkillEdit
from resume_editor.models.resume import EducationEntry, ExperienceEntry


class TestApplyEdit:
    def test_personal_info(self, sample_document):
        doc = apply_edit(sample_document, PersonalInfoEdit(field="phone", value="555-0199"))
        assert doc.personal_info.phone == "555-0199"
        assert doc.personal_info.name == "Alex Kim"
        assert sample_document.personal_info.phone == "555-0100"

    def test_edit_isolation(self, sample_document):
        doc = apply_edit(
            sample_document, SequenceEdit(section="experience", index=0, field="title", value="Eng")
        )
        assert doc.experience[0] == ExperienceEntry(title="Eng", company="Acme", description="APIs")
        assert doc.experience[1] == sample_document.experience[1]
        assert doc.experience[1].model_dump_json() == sample_document.experience[1].model_dump_json()

    def test_structural_sharing(self, sample_document):
        doc = apply_edit(
            sample_document, SequenceEdit(section="experience", index=0, field="title", value="Eng")
        )
        assert doc.experience[1] is sample_document.experience[1]
        assert doc.education is sample_document.education
        assert doc.personal_info is sample_document.personal_info

    def test_input_not_mutated(self, sample_document):
        before = sample_document.to_wire()
        apply_edit(sample_document, SequenceEdit(section="education", index=0, field="degree", value="MA"))
        assert sample_document.to_wire() == before

    def test_out_of_range(self, blank_document):
        intent = SequenceEdit(section="experience", index=5, field="title", value="x")
        with pytest.raises(OutOfRange) as exc_info:
            apply_edit(blank_document, intent)
        assert exc_info.value.index == 5
        assert exc_info.value.length == 1
        assert blank_document.experience == (ExperienceEntry(),)

    def test_negative_index_is_out_of_range(self, sample_document):
        with pytest.raises(OutOfRange):
            apply_edit(sample_document, SequenceEdit(section="experience", index=-1, field="title", value="x"))

    def test_out_of_range_is_index_error(self, blank_document):
        with pytest.raises(IndexError):
            apply_edit(blank_document, SequenceEdit(section="education", index=1, field="degree", value="x"))

    def test_skill_edit(self, sample_document):
        doc = apply_edit(sample_document, SkillEdit(index=2, value="Rust"))
        assert doc.skills == ("Python", "SQL", "Rust")

    def test_skill_edit_out_of_range(self, blank_document):
        with pytest.raises(OutOfRange):
            apply_edit(blank_document, SkillEdit(index=0, value="Go"))


class TestResize:
    def test_append_entry(self, sample_document):
        doc = append_entry(sample_document, "education")
        assert doc.education == (sample_document.education[0], EducationEntry())

    def test_append_skill(self, sample_document):
        assert append_entry(sample_document, "skills").skills[-1] == ""

    def test_append_then_edit(self, blank_document):
        doc = append_entry(blank_document, "experience")
        doc = apply_edit(doc, SequenceEdit(section="experience", index=1, field="company", value="Acme"))
        assert doc.experience[1].company == "Acme"

    def test_remove_entry_keeps_order(self, sample_document):
        doc = remove_entry(sample_document, "skills", 0)
        assert doc.skills == ("SQL", "Python")

    def test_remove_last_entry_leaves_empty_section(self, blank_document):
        doc = remove_entry(blank_document, "experience", 0)
        assert doc.experience == ()

    def test_remove_out_of_range(self, sample_document):
        with pytest.raises(OutOfRange):
            remove_entry(sample_document, "experience", 2)

    def test_unknown_section(self, sample_document):
        with pytest.raises(ValueError, match="Unknown section"):
            append_entry(sample_document, "personalInfo")
        with pytest.raises(ValueError, match="Unknown section"):
            remove_entry(sample_document, "projects", 0)


class TestReplay:
    def test_replay_is_deterministic(self, blank_document):
        intents = [
            PersonalInfoEdit(field="name", value="J"),
            PersonalInfoEdit(field="name", value="Jane"),
            SequenceEdit(section="experience", index=0, field="title", value="Dev"),
        ]
        first = replay(blank_document, intents)
        assert first == replay(blank_document, intents)
        assert first.personal_info.name == "Jane"
        assert first.experience[0].title == "Dev"

    def test_replay_stops_at_bad_intent(self, blank_document):
        intents = [SequenceEdit(section="education", index=3, field="degree", value="x")]
        with pytest.raises(OutOfRange):
            replay(blank_document, intents)
