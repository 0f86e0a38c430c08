from typing import List

from core.models import EducationEntry, Resume, WorkExperienceEntry


class MarkdownFormattingAgent:
    """
    Formats a structured resume into a Markdown preview.
    Deterministic: no LLM call is involved.
    """

    def _format_experience(self, items: List[WorkExperienceEntry]) -> List[str]:
        lines = ["## Work Experience"]
        for item in items:
            left_part = " | ".join(filter(None, [f"**{item.job_title}**", item.company, item.location]))
            lines.append(f"{left_part} ||| {item.dates}")

            for point in item.responsibilities:
                clean_point = point.replace('**', '').replace('*', '').replace('`', '')
                lines.append(f"- {clean_point}")
            lines.append("")
        return lines

    def _format_education(self, items: List[EducationEntry]) -> List[str]:
        lines = ["## Education"]
        for item in items:
            lines.append(f"**{item.degree}** ||| {item.graduation_date}")
            lines.append(f"*{', '.join(filter(None, [item.institution, item.location]))}*")
            lines.append("")
        return lines

    def run(self, resume: Resume) -> str:
        """Constructs the full resume in a structured Markdown format."""
        resume_parts = [
            f"# {resume.contact_info.name}",
            resume.contact_info.contact_line(),
            "",
        ]

        if resume.summary:
            resume_parts.extend(["## Summary", resume.summary, ""])

        if resume.work_experience:
            resume_parts.extend(self._format_experience(resume.work_experience))

        if resume.education:
            resume_parts.extend(self._format_education(resume.education))

        if resume.skills:
            resume_parts.extend(["## Skills", ", ".join(resume.skills)])

        return "\n".join(resume_parts).strip()
