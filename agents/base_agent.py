import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from core.exceptions import ExtractionError

RecordT = TypeVar("RecordT", bound=BaseModel)


class StructuredOutputAgent:
    """
    Shared plumbing for agents that send one prompt with a declared output shape
    and deserialize the reply into a typed record.

    Subclasses build the prompt; this class performs the call, keeps the last
    prompt and raw response for inspection, and turns every failure into an
    ``ExtractionError``. Malformed replies are never repaired or retried.
    """

    operation = "generate"

    def __init__(self, gemini_client):
        """
        Args:
            gemini_client: An instance of a client for Gemini API calls.
        """
        self.llm = gemini_client
        self.last_response = ""
        self.last_prompt = ""

    def _request(
        self,
        prompt: str,
        response_schema: Dict[str, Any],
        record_type: Type[RecordT],
        thinking_budget: Optional[int] = None,
    ) -> RecordT:
        self.last_prompt = prompt
        self.last_response = ""

        try:
            response_text = self.llm.generate_json(
                prompt,
                response_schema=response_schema,
                thinking_budget=thinking_budget,
            )
        except Exception as e:
            logging.error(f"Gemini request failed during {self.operation}: {e}")
            raise ExtractionError(self.operation, "AI service request failed", e)

        self.last_response = response_text or ""
        json_text = self.last_response.strip()
        if not json_text:
            logging.error(f"Received an empty response from the LLM during {self.operation}.")
            raise ExtractionError(self.operation, "AI service returned an empty response")

        try:
            payload = json.loads(json_text)
        except json.JSONDecodeError as e:
            logging.error(f"Critical Error: Failed to decode JSON from the LLM response during {self.operation}.")
            logging.debug(f"Raw response was: {self.last_response}")
            raise ExtractionError(self.operation, "AI service returned invalid JSON", e)

        try:
            record = record_type.model_validate(payload)
        except ValidationError as e:
            logging.error(f"LLM response does not match the {record_type.__name__} shape during {self.operation}.")
            raise ExtractionError(
                self.operation,
                f"AI service response does not match the {record_type.__name__} shape",
                e,
            )

        logging.info(f"Successfully completed {self.operation}.")
        return record
