"""config.py
Runtime settings resolved from the environment (and a local .env file).
"""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_MODEL = "gemini-2.5-flash"
API_KEY_VARIABLES = ("GEMINI_API_KEY", "API_KEY")


@dataclass(frozen=True)
class Settings:
    """
    Settings shared by the CLI and the HTTP server.

    Attributes:
        api_key: Credential for the Gemini API. Required.
        model_name: Gemini model identifier used for every request.
        max_attempts: Attempts per request; 1 means a failed call is not retried.
        output_dir: Directory for exported documents and response logs.
        log_level: Name of the root logging level.
    """
    api_key: str
    model_name: str = DEFAULT_MODEL
    max_attempts: int = 1
    output_dir: str = "output"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Builds settings from environment variables.

        Raises:
            ConfigurationError: If no API key is set or a numeric setting is invalid.
        """
        load_dotenv()

        api_key = next((os.getenv(name) for name in API_KEY_VARIABLES if os.getenv(name)), None)
        if not api_key or api_key == "<REPLACE_ME>":
            raise ConfigurationError(
                variable_name="GEMINI_API_KEY",
                message="GEMINI_API_KEY environment variable not set.",
            )

        raw_attempts = os.getenv("GEMINI_MAX_ATTEMPTS", "1")
        try:
            max_attempts = int(raw_attempts)
        except ValueError:
            raise ConfigurationError(
                variable_name="GEMINI_MAX_ATTEMPTS",
                message=f"GEMINI_MAX_ATTEMPTS must be an integer, got {raw_attempts!r}.",
            )
        if max_attempts < 1:
            raise ConfigurationError(
                variable_name="GEMINI_MAX_ATTEMPTS",
                message="GEMINI_MAX_ATTEMPTS must be at least 1.",
            )

        return cls(
            api_key=api_key,
            model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            max_attempts=max_attempts,
            output_dir=os.getenv("RESUME_OUTPUT_DIR", "output"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
