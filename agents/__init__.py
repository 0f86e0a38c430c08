# This file makes the 'agents' directory a Python package,
# allowing for clean imports of the agent classes.

from .resume_parsing_agent import ResumeParsingAgent
from .resume_enhancement_agent import ResumeEnhancementAgent
from .resume_modification_agent import ResumeModificationAgent
from .ats_scoring_agent import AtsScoringAgent
from .markdown_formatting_agent import MarkdownFormattingAgent

__all__ = [
    "ResumeParsingAgent",
    "ResumeEnhancementAgent",
    "ResumeModificationAgent",
    "AtsScoringAgent",
    "MarkdownFormattingAgent",
]
