from core.exceptions import PreconditionError
from core.models import Resume
from core.schemas import RESUME_SCHEMA

from .base_agent import StructuredOutputAgent


class ResumeParsingAgent(StructuredOutputAgent):
    """
    Converts raw, pasted resume text into a structured Resume.

    The raw text is embedded verbatim in the prompt and the service is asked
    for the Resume shape, with empty strings for anything the text lacks.
    Thinking is disabled for this call to keep latency low.
    """

    operation = "extract"

    def _create_prompt(self, resume_text: str) -> str:
        return f"""Parse the following resume text and extract the information into the specified JSON format. Make sure to accurately capture all sections. If a piece of information like a portfolio URL is missing, return an empty string for that field.

Resume Text:
---
{resume_text}
---"""

    def run(self, resume_text: str) -> Resume:
        """
        Args:
            resume_text: The raw text of the resume.

        Returns:
            A new Resume with name and email populated.

        Raises:
            PreconditionError: If the text is empty.
            ExtractionError: If the call fails or the reply is not a valid Resume.
        """
        if not resume_text or not resume_text.strip():
            raise PreconditionError("Please paste your resume text first.")

        prompt = self._create_prompt(resume_text)
        return self._request(prompt, RESUME_SCHEMA, Resume, thinking_budget=0)
