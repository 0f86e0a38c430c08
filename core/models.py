"""models.py
Structured resume records exchanged with the AI service and the exporters.

Records are immutable: every AI round-trip produces a new Resume that replaces
the previous one. Wire names are camelCase, Python attributes snake_case.
"""
import json
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ContactInfo(_Record):
    """
    Contact details shown in the resume header.

    Attributes:
        name (str): Full name. Required and non-empty.
        phone (str): Phone number, empty string when absent.
        email (str): Email address. Required and non-empty.
        linkedin (str): LinkedIn URL, empty string when absent.
        portfolio (str): Portfolio URL, empty string when absent.
    """
    name: str
    phone: str = ""
    email: str
    linkedin: str = ""
    portfolio: str = ""

    @field_validator("name", "email")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    def contact_line(self, separator: str = " | ") -> str:
        """Joins the non-empty contact parts; absent fields leave no stray separators."""
        parts = [self.phone, self.email, self.linkedin, self.portfolio]
        return separator.join(part.strip() for part in parts if part and part.strip())


class WorkExperienceEntry(_Record):
    job_title: str = Field(alias="jobTitle")
    company: str
    location: str = ""
    dates: str
    responsibilities: List[str] = Field(default_factory=list)


class EducationEntry(_Record):
    degree: str
    institution: str
    location: str = ""
    graduation_date: str = Field(alias="graduationDate")


class Resume(_Record):
    """
    The canonical structured resume record.

    All five top-level sections are required when deserializing a service
    response, so a Resume always carries the same shape.
    """
    contact_info: ContactInfo = Field(alias="contactInfo")
    summary: str
    work_experience: List[WorkExperienceEntry] = Field(alias="workExperience")
    education: List[EducationEntry]
    skills: List[str]

    def to_json(self, indent: int = 2) -> str:
        """Serializes the resume with its wire (camelCase) field names."""
        return json.dumps(self.model_dump(by_alias=True), indent=indent, ensure_ascii=False)


class AtsResult(_Record):
    """
    Outcome of scoring a resume against a job description.

    Attributes:
        score (int): Match quality from 0 to 100.
        strengths (str): Paragraph summarizing the resume's strengths.
        suggestions (List[str]): Actionable suggestions for improvement.
    """
    score: int = Field(ge=0, le=100, strict=True)
    strengths: str
    suggestions: List[str]

    @property
    def rating(self) -> str:
        if self.score >= 85:
            return "strong"
        if self.score >= 70:
            return "fair"
        return "weak"
