"""Read-only view models consumed by preview renderers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


class HeaderBlock(_View):
    name: str
    contact: tuple[str, ...]  # non-empty email/phone, in that order
    contact_line: str


class PreviewEntry(_View):
    title: str
    subtitle: str = ""
    body: str = ""


class PreviewSection(_View):
    key: str
    heading: str
    entries: tuple[PreviewEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries


class PreviewView(_View):
    header: HeaderBlock
    sections: tuple[PreviewSection, ...]

    def section(self, key: str) -> PreviewSection:
        for section in self.sections:
            if section.key == key:
                return section
        raise KeyError(key)
