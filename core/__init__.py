"""
Core module for AI Resume Studio.

This package contains the non-agent components: the structured records and
their declared output shapes, the Gemini API client, the AI gateway, the
session that owns the live resume, and the document exporters.

``AIGateway`` and ``ResumeSession`` depend on the ``agents`` package and are
imported from their own modules (``core.ai_gateway``, ``core.session``).
"""

from .gemini_client import GeminiClient
from .models import AtsResult, ContactInfo, EducationEntry, Resume, WorkExperienceEntry
from .pdf_docx_generator import PdfDocxGenerator

__all__ = [
    "GeminiClient",
    "PdfDocxGenerator",
    "AtsResult",
    "ContactInfo",
    "EducationEntry",
    "Resume",
    "WorkExperienceEntry",
]
