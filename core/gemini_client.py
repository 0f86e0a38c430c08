import logging
from typing import Any, Dict, Optional

# The new SDK is imported from the top-level 'google' package
from google import genai
from google.genai import types
from tenacity import Retrying, stop_after_attempt, wait_exponential, retry_if_exception_type

from .config import DEFAULT_MODEL


class GeminiClient:
    """
    A client for interacting with the Google Gemini API using the Google GenAI SDK.

    This class encapsulates API key management, model configuration and structured
    (JSON) generation requests. Every request is a single, stateless call: the
    prompt and the declared output shape go out, one complete response comes back.
    Failed calls are only retried when ``max_attempts`` is greater than 1.
    """

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL, max_attempts: int = 1):
        """
        Initializes and configures the Gemini client.

        Args:
            api_key: The Google AI API key.
            model_name: The specific Gemini model to use (e.g., "gemini-2.5-pro").
            max_attempts: Total attempts per request, including the first one.
        """
        if not api_key:
            raise ValueError("API key for Gemini client cannot be None or empty.")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")

        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name
        self.max_attempts = max_attempts
        logging.info(f"GeminiClient initialized with model: {self.model_name}")

    def _retrying(self) -> Retrying:
        return Retrying(
            wait=wait_exponential(multiplier=1, min=4, max=10),
            stop=stop_after_attempt(self.max_attempts),
            retry=retry_if_exception_type(Exception),
            before_sleep=lambda retry_state: logging.warning(
                f"Retrying Gemini API call... Attempt #{retry_state.attempt_number}"
            ),
            reraise=True,
        )

    def generate_json(
        self,
        prompt: str,
        response_schema: Dict[str, Any],
        thinking_budget: Optional[int] = None,
    ) -> str:
        """
        Generates JSON text constrained to a declared output shape.

        Args:
            prompt: The text prompt to send to the model.
            response_schema: The declared output shape, passed verbatim to the service.
            thinking_budget: Optional thinking token budget; 0 disables thinking.

        Returns:
            The raw response text, expected to be JSON matching ``response_schema``.
            An empty string when the service returned no text.

        Raises:
            Exception: Whatever the SDK raised on the final attempt.
        """
        config_kwargs = {
            "response_mime_type": "application/json",
            "response_schema": response_schema,
        }
        if thinking_budget is not None:
            config_kwargs["thinking_config"] = types.ThinkingConfig(thinking_budget=thinking_budget)
        config = types.GenerateContentConfig(**config_kwargs)

        return self._retrying()(self._generate, prompt, config)

    def _generate(self, prompt: str, config: types.GenerateContentConfig) -> str:
        try:
            logging.info("Sending prompt to Gemini API...")
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=config,
            )

            if response.text:
                return response.text
            else:
                logging.warning("Gemini API returned an empty or blocked response.")
                return ""

        except Exception as e:
            logging.error(f"An error occurred in GeminiClient: {e}")
            raise
