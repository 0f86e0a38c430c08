from core.models import Resume
from core.schemas import RESUME_SCHEMA

from .base_agent import StructuredOutputAgent


class ResumeEnhancementAgent(StructuredOutputAgent):
    """
    Rewrites a structured resume to be more ATS-friendly: strong action verbs,
    quantified achievements and standard phrasing. The model is told not to
    add any new information or skills.
    """

    operation = "enhance"

    def _create_prompt(self, resume: Resume) -> str:
        return f"""Given the following resume in JSON format, enhance it to be more ATS-friendly. Focus on using strong action verbs, quantifying achievements where possible, and ensuring clear, standard phrasing. Rephrase responsibilities to highlight impact and results. Do not add any new information or skills. Return the enhanced resume in the exact same JSON format.

Resume JSON:
---
{resume.to_json()}
---"""

    def run(self, resume: Resume) -> Resume:
        prompt = self._create_prompt(resume)
        return self._request(prompt, RESUME_SCHEMA, Resume)
