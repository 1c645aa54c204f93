"""Edit intents produced by the form layer."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from resume_editor.models.resume import ENTRY_FIELDS, SequenceSection


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True)


class PersonalInfoEdit(_Intent):
    kind: Literal["personal_info"] = "personal_info"
    field: Literal["name", "email", "phone"]
    value: str


class SequenceEdit(_Intent):
    kind: Literal["sequence"] = "sequence"
    section: SequenceSection
    index: int
    field: str
    value: str

    @model_validator(mode="after")
    def _check_field(self) -> SequenceEdit:
        allowed = ENTRY_FIELDS[self.section]
        if self.field not in allowed:
            raise ValueError(
                f"Unknown {self.section} field {self.field!r}; expected one of {allowed}"
            )
        return self


class SkillEdit(_Intent):
    kind: Literal["skill"] = "skill"
    index: int
    value: str


EditIntent = Annotated[
    Union[PersonalInfoEdit, SequenceEdit, SkillEdit],
    Field(discriminator="kind"),
]

_intent_adapter: TypeAdapter[EditIntent] = TypeAdapter(EditIntent)


def parse_intent(data: dict[str, Any]) -> EditIntent:
    """Validate a raw intent dict (must carry ``kind``)."""
    return _intent_adapter.validate_python(data)


def edit_intent(section: str, index: int, field: str, value: str) -> EditIntent:
    """Build an intent from the flat ``(section, index, field, value)`` form callback.

    ``personalInfo`` has no index; the argument is ignored for it.
    """
    if section == "personalInfo":
        return PersonalInfoEdit(field=field, value=value)
    if section == "skills":
        return SkillEdit(index=index, value=value)
    return SequenceEdit(section=section, index=index, field=field, value=value)
