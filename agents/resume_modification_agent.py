from core.exceptions import PreconditionError
from core.models import Resume
from core.schemas import RESUME_SCHEMA

from .base_agent import StructuredOutputAgent


class ResumeModificationAgent(StructuredOutputAgent):
    """Applies a free-text user request to a structured resume."""

    operation = "modify"

    def _create_prompt(self, resume: Resume, instruction: str) -> str:
        return f"""Given the following resume in JSON format, apply the following modification requested by the user. Adhere strictly to the user's request. Return the modified resume in the exact same JSON format.

User's Request: "{instruction}"

Resume JSON:
---
{resume.to_json()}
---"""

    def run(self, resume: Resume, instruction: str) -> Resume:
        """
        Raises:
            PreconditionError: If the instruction is empty. Checked before any call.
            ExtractionError: If the call fails or the reply is not a valid Resume.
        """
        if not instruction or not instruction.strip():
            raise PreconditionError("Please enter a modification prompt.")

        prompt = self._create_prompt(resume, instruction)
        return self._request(prompt, RESUME_SCHEMA, Resume)
