from core.exceptions import PreconditionError
from core.models import AtsResult, Resume
from core.schemas import ATS_SCHEMA

from .base_agent import StructuredOutputAgent


class AtsScoringAgent(StructuredOutputAgent):
    """
    Acts as an Applicant Tracking System: scores a resume against a job
    description and returns strengths plus improvement suggestions.

    Scores outside 0-100 or non-integer scores are rejected even when the
    reply otherwise matches the declared shape.
    """

    operation = "score"

    def _create_prompt(self, resume: Resume, job_description: str) -> str:
        return f"""Act as an advanced Applicant Tracking System (ATS) and resume expert. Analyze the following resume (in JSON format) against the provided job description.
Provide a score out of 100 representing the match quality.
Also, provide a brief summary of the resume's strengths for this role, and a list of specific, actionable suggestions for improvement to better align with the job description.

The output must be a JSON object with keys: "score" (number), "strengths" (string), and "suggestions" (an array of strings).

Job Description:
---
{job_description}
---

Resume JSON:
---
{resume.to_json()}
---"""

    def run(self, resume: Resume, job_description: str) -> AtsResult:
        if not job_description or not job_description.strip():
            raise PreconditionError("Please paste the job description first.")

        prompt = self._create_prompt(resume, job_description)
        return self._request(prompt, ATS_SCHEMA, AtsResult)
