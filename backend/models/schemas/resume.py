"""Normalized resume extracted from an uploaded document."""

import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Stamped on every parsed resume; marks provenance, not document content
RAW_TEXT_MARKER = "Extracted from file"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either spelling."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactInfo(CamelModel):
    email: str = ""
    phone: str = ""
    linkedin: str | None = None
    location: str | None = None


class WorkExperience(CamelModel):
    """A single job entry. Bullet order is display order."""
    id: str = ""
    company: str = ""
    role: str = ""
    dates: str = ""
    location: str | None = None
    description: list[str] = []


class Education(CamelModel):
    id: str = ""
    school: str = ""
    degree: str = ""
    dates: str = ""


class ResumeData(CamelModel):
    full_name: str = ""
    contact_info: ContactInfo = ContactInfo()
    summary: str = ""
    skills: list[str] = []
    experience: list[WorkExperience] = []
    education: list[Education] = []
    raw_text: str | None = None

    def find_experience(self, experience_id: str) -> WorkExperience | None:
        for exp in self.experience:
            if exp.id == experience_id:
                return exp
        return None

    def duplicate_ids(self) -> list[str]:
        """Non-empty entry ids used more than once across experience and education."""
        seen: set[str] = set()
        dupes: list[str] = []
        for entry in [*self.experience, *self.education]:
            if not entry.id:
                continue
            if entry.id in seen and entry.id not in dupes:
                dupes.append(entry.id)
            seen.add(entry.id)
        return dupes

    def assign_unique_ids(self) -> None:
        """Replace missing or repeated entry ids with fresh ones, in place.

        The first entry to use an id keeps it; later entries get a new id.
        """
        seen: set[str] = set()
        for prefix, entries in (("exp", self.experience), ("edu", self.education)):
            for entry in entries:
                if not entry.id or entry.id in seen:
                    entry.id = _make_id(prefix, seen)
                seen.add(entry.id)


def _make_id(prefix: str, taken: set[str]) -> str:
    while True:
        candidate = f"{prefix}_{uuid.uuid4().hex[:8]}"
        if candidate not in taken:
            return candidate
