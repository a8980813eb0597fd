"""Session-editable CV document."""

from __future__ import annotations

from dataclasses import dataclass, field

from elevate_cv.models.draft import GeneratedDraft, Theme

DEFAULT_NAME = "YOUR FULL NAME"
DEFAULT_LOCATION = "City, Country"


def _default_contacts() -> dict[str, str]:
    return {"email": "CONTACT@DOMAIN.COM", "phone": "+1 (555) 000-0000"}


@dataclass
class DocumentModel:
    """A CV being edited in the current session.

    Built from a ``GeneratedDraft`` and then diverges under user edits and
    section refinements. ``sections`` keeps insertion order, which is the
    presentation order; edits never reorder it.
    """

    sections: dict[str, str] = field(default_factory=dict)
    skills: list[str] = field(default_factory=list)
    headline: str = ""
    selected_theme: Theme = Theme.TECH
    user_name: str = DEFAULT_NAME
    user_location: str = DEFAULT_LOCATION
    contact_fields: dict[str, str] = field(default_factory=_default_contacts)
    refining: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_draft(cls, draft: GeneratedDraft) -> DocumentModel:
        sections: dict[str, str] = {}
        for section in draft.suggested_sections:
            sections[section.title] = section.content
        return cls(
            sections=sections,
            skills=list(draft.suggested_skills),
            headline=draft.niche_summary,
            selected_theme=draft.theme,
        )

    def set_name(self, value: str) -> None:
        self.user_name = value.upper()

    def set_location(self, value: str) -> None:
        self.user_location = value

    def set_contact(self, field_name: str, value: str) -> None:
        self.contact_fields[field_name] = value

    def edit_section(self, title: str, text: str) -> None:
        if title not in self.sections:
            raise KeyError(f"Unknown section: {title}")
        self.sections[title] = text

    def set_theme(self, theme: Theme | str) -> None:
        self.selected_theme = Theme(theme)

    def is_refining(self, title: str) -> bool:
        return self.refining.get(title, False)
