"""
AI Service Module

This module handles text generation using Google's Gemini API.
It sends one prompt per request and returns the first candidate's text,
translating every failure into a distinct AIServiceError subclass.
"""

from typing import Optional, Any

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from config import settings
from utils.exceptions import (
    AIServiceError, MissingCredentialError, InvalidCredentialError,
    CompletionTransportError, CompletionServiceError, MalformedResponseError
)
from utils.helpers import truncate_text
from utils.logger import get_logger

logger = get_logger(__name__)

TRANSPORT_ERRORS = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
    google_exceptions.RetryError,
    OSError,
)

CREDENTIAL_ERRORS = (
    google_exceptions.Unauthenticated,
    google_exceptions.PermissionDenied,
)


class AIService:
    """Service for text generation with Google's Gemini API."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None,
                 max_output_tokens: Optional[int] = None):
        """
        Initialize the AI service.

        The API key is not checked here; a missing key is reported when a
        generation is requested.
        """
        self.api_key = api_key
        self.model_name = model_name or settings.GENERATION_MODEL
        self.max_output_tokens = max_output_tokens or settings.GENERATION_MAX_TOKENS
        self.model = None

    def _get_model(self):
        """Configure the Gemini client and model on first use."""
        if self.model is not None:
            return self.model

        api_key = self.api_key or settings.GOOGLE_AI_API_KEY
        if not api_key:
            raise MissingCredentialError("Missing required GOOGLE_AI_API_KEY")

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config=genai.GenerationConfig(max_output_tokens=self.max_output_tokens),
        )
        logger.info(f"Selected AI model: {self.model_name}")
        return self.model

    @staticmethod
    def _extract_text(response: Any) -> str:
        """
        Return the text of the first candidate in a Gemini response.

        Raises:
            MalformedResponseError: If there is no candidate or no text.
        """
        candidates = getattr(response, "candidates", None)
        if not candidates:
            feedback = getattr(response, "prompt_feedback", None)
            raise MalformedResponseError(f"Response contained no candidates (feedback: {feedback})")

        first = candidates[0]
        parts = getattr(getattr(first, "content", None), "parts", None)
        if not parts:
            finish_reason = getattr(first, "finish_reason", None)
            raise MalformedResponseError(f"First candidate has no content parts (finish_reason: {finish_reason})")

        texts = [part.text for part in parts if isinstance(getattr(part, "text", None), str)]
        text = "".join(texts)
        if not text.strip():
            raise MalformedResponseError("First candidate contained no text")

        return text

    def generate_completion(self, prompt: str) -> str:
        """
        Send a prompt to the model and return the generated text.

        Args:
            prompt: The full instruction string.

        Returns:
            str: The first candidate's text content.

        Raises:
            MissingCredentialError: No API key is configured.
            InvalidCredentialError: The API key was rejected.
            CompletionTransportError: The service could not be reached.
            CompletionServiceError: The service reported an error.
            MalformedResponseError: The response had no usable text.
        """
        model = self._get_model()

        try:
            response = model.generate_content([{"role": "user", "parts": [prompt]}])
        except CREDENTIAL_ERRORS as e:
            logger.error(f"Gemini rejected credentials: {e}")
            raise InvalidCredentialError(str(e)) from e
        except google_exceptions.InvalidArgument as e:
            if "api key" in str(e).lower():
                logger.error(f"Gemini rejected API key: {e}")
                raise InvalidCredentialError(str(e)) from e
            logger.error(f"Gemini rejected request: {e}", exc_info=True)
            raise CompletionServiceError(str(e)) from e
        except TRANSPORT_ERRORS as e:
            logger.error(f"Network error calling Gemini: {e}", exc_info=True)
            raise CompletionTransportError(str(e)) from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini service error: {e}", exc_info=True)
            raise CompletionServiceError(str(e)) from e
        except AIServiceError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error calling Gemini: {e}", exc_info=True)
            raise CompletionServiceError(str(e)) from e

        text = self._extract_text(response)
        logger.info(f"Received {len(text)} characters from model: '{truncate_text(text, 60)}'")
        return text
