import asyncio
import logging
from typing import Any, Optional

import aiohttp
import httpx
from google import genai
from google.genai import errors, types

from config import Settings

logger = logging.getLogger(__name__)

# google-genai sends async calls through aiohttp when it is installed, httpx otherwise
TRANSPORT_ERRORS = (httpx.TransportError, aiohttp.ClientError, asyncio.TimeoutError)


class LLMNotConfiguredError(ValueError):
    """Raised when a generation call is made without an API key."""


class UpstreamServiceError(Exception):
    """
    The text-generation service failed at the HTTP or transport level.

    Attributes:
        status_code: HTTP status reported upstream, or None for transport failures
        message: Short description from the provider
        details: Provider error body, if any
    """

    def __init__(
        self, status_code: Optional[int], message: str, details: Any = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class LLMService:
    """Service for Google Gemini text generation with native async support."""

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None):
        self.settings = settings
        self.model_name = settings.gemini_model
        self.client = client if client is not None else self._create_client()

    def _create_client(self) -> Optional[genai.Client]:
        """Initialize the Gemini API client."""
        if not self.settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY not set. Canvas commands will not work.")
            return None

        try:
            client = genai.Client(
                api_key=self.settings.gemini_api_key,
                http_options=types.HttpOptions(
                    timeout=int(self.settings.llm_timeout_seconds * 1000)
                ),
            )
            logger.info(f"Gemini API initialized with model {self.model_name}")
            return client
        except Exception as e:
            logger.error(f"Failed to initialize Gemini API: {e}")
            return None

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def _ensure_client(self):
        """Check if client is available, raise if not."""
        if not self.client:
            raise LLMNotConfiguredError(
                "LLM service not initialized. Please set GEMINI_API_KEY."
            )

    async def generate(self, system_prompt: str, user_prompt: str) -> dict:
        """
        Send one system + user prompt pair to Gemini.

        Args:
            system_prompt: Fixed instructions describing the expected output
            user_prompt: The request-specific prompt

        Returns:
            The raw generateContent reply as a plain dict

        Raises:
            UpstreamServiceError: If the provider returns an error status or
                cannot be reached
        """
        self._ensure_client()

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    temperature=self.settings.llm_temperature,
                    max_output_tokens=self.settings.llm_max_output_tokens,
                ),
            )
        except errors.APIError as e:
            logger.error(f"Gemini API error {e.code}: {e.message}")
            raise UpstreamServiceError(e.code, e.message or str(e), e.details) from e
        except TRANSPORT_ERRORS as e:
            logger.error(f"Could not reach Gemini API: {e!r}")
            raise UpstreamServiceError(None, "Could not reach the AI provider") from e

        return response.model_dump(mode="json", exclude_none=True)
