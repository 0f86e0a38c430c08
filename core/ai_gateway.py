import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar

from agents import AtsScoringAgent, ResumeEnhancementAgent, ResumeModificationAgent, ResumeParsingAgent

from .exceptions import ExtractionError
from .models import AtsResult, Resume
from .response_logger import ResponseLogger

T = TypeVar("T")


class AIGateway:
    """
    Single entry point for the four AI intents: extract, enhance, modify, score.

    Each method is one stateless request/response round-trip through the
    matching agent. Inputs are never mutated; resume-producing calls return a
    brand-new Resume. Every failure surfaces as ``PreconditionError`` (before
    any call) or ``ExtractionError``.
    """

    def __init__(self, gemini_client, response_logger: Optional[ResponseLogger] = None):
        """
        Args:
            gemini_client: A client exposing ``generate_json(prompt, response_schema, thinking_budget)``.
            response_logger: Optional recorder for prompts, raw responses and timings.
        """
        self.gemini_client = gemini_client
        self.response_logger = response_logger
        self.parsing_agent = ResumeParsingAgent(gemini_client)
        self.enhancement_agent = ResumeEnhancementAgent(gemini_client)
        self.modification_agent = ResumeModificationAgent(gemini_client)
        self.scoring_agent = AtsScoringAgent(gemini_client)

    def _call(self, agent, operation: str, run: Callable[[], T]) -> T:
        logging.info(f"AI gateway: {operation}")
        started_at = datetime.now()
        try:
            result = run()
        except ExtractionError as e:
            if self.response_logger:
                self.response_logger.record(operation, agent, started_at, error=e)
            raise
        if self.response_logger:
            self.response_logger.record(operation, agent, started_at)
        return result

    def extract(self, raw_text: str) -> Resume:
        return self._call(self.parsing_agent, "extract", lambda: self.parsing_agent.run(raw_text))

    def enhance(self, resume: Resume) -> Resume:
        return self._call(self.enhancement_agent, "enhance", lambda: self.enhancement_agent.run(resume))

    def modify(self, resume: Resume, instruction: str) -> Resume:
        return self._call(
            self.modification_agent,
            "modify",
            lambda: self.modification_agent.run(resume, instruction),
        )

    def score(self, resume: Resume, job_description: str) -> AtsResult:
        return self._call(
            self.scoring_agent,
            "score",
            lambda: self.scoring_agent.run(resume, job_description),
        )
