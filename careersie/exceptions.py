"""Custom exceptions for Careersie extraction and configuration failures."""

from typing import Optional


class CareersieError(Exception):
    """Base class for all Careersie errors."""


class ExtractionError(CareersieError):
    """Raised when a job description cannot be turned into ParsedJobData."""


class ConfigurationError(ExtractionError):
    """
    Raised when the external model cannot be configured.

    Covers a missing API credential, an unknown provider name, or a provider
    SDK that is not installed. Fatal: retrying will not help.
    """


class ModelCallError(ExtractionError):
    """
    Raised when the external model call itself fails.

    Covers connection errors, upstream HTTP errors and rate limits that
    outlast the provider's retries. Distinct from ExtractionSchemaError so
    callers can report an upstream failure (502) rather than a bad response.
    """


class ExtractionSchemaError(ExtractionError):
    """
    Raised when the model response does not validate against ParsedJobData.

    Attributes:
        message: Error description
        missing_keys: Required keys absent from the response
        invalid_keys: Keys present but with the wrong type
        response_snippet: Start of the raw model response
    """

    def __init__(
        self,
        message: str,
        missing_keys: Optional[list[str]] = None,
        invalid_keys: Optional[list[str]] = None,
        response_snippet: Optional[str] = None,
    ):
        self.message = message
        self.missing_keys = missing_keys or []
        self.invalid_keys = invalid_keys or []
        self.response_snippet = response_snippet

        parts = [message]

        if self.missing_keys:
            parts.append(f"Missing keys: {', '.join(self.missing_keys)}")

        if self.invalid_keys:
            parts.append(f"Invalid keys: {', '.join(self.invalid_keys)}")

        if response_snippet:
            snippet = (
                response_snippet[:200] + "..." if len(response_snippet) > 200 else response_snippet
            )
            parts.append(f"\nModel response:\n{snippet}")

        super().__init__("\n".join(parts))
