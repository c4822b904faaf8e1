"""
Custom Exception Classes for the Post Remixer Application

This module defines custom exceptions for better error handling and
categorization of failures across the application. Every exception carries
a ``user_message`` that the session layer shows in place of generated output.
"""

from typing import Optional


class RemixerError(Exception):
    """Base exception for all Post Remixer application errors."""
    user_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(RemixerError):
    """Raised when configuration validation fails or required settings are missing."""
    user_message = "The application is not configured correctly."


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(RemixerError):
    """Raised when user input is rejected before any network call."""
    user_message = "Please enter some text first."


# =============================================================================
# AI Service Errors
# =============================================================================

class AIServiceError(RemixerError):
    """Base exception for AI service errors."""
    user_message = "The text generation service failed. Please try again."


class MissingCredentialError(AIServiceError):
    """Raised when no generation-service API key is configured."""
    user_message = "No API key configured for the text generation service. Set GOOGLE_AI_API_KEY."


class InvalidCredentialError(AIServiceError):
    """Raised when the generation service rejects the configured API key."""
    user_message = "The text generation service rejected the API key. Check GOOGLE_AI_API_KEY."


class CompletionTransportError(AIServiceError):
    """Raised when the generation service cannot be reached."""
    user_message = "Could not reach the text generation service. Check your network connection."


class CompletionServiceError(AIServiceError):
    """Raised when the generation service reports an error."""
    user_message = "The text generation service returned an error."


class MalformedResponseError(AIServiceError):
    """Raised when the generation response has no usable text."""
    user_message = "The text generation service returned an empty or malformed response."


class UnparseableResponseError(AIServiceError):
    """Raised when the model output contains no post markers."""
    user_message = "The generated text could not be split into posts. Please try again."


# =============================================================================
# Database Errors
# =============================================================================

class DatabaseError(RemixerError):
    """Base exception for database-related errors."""
    user_message = "The saved posts store failed."


class ConnectionError(DatabaseError):
    """Raised when database connection fails."""
    user_message = "Could not connect to the saved posts store."


class QueryError(DatabaseError):
    """Raised when a database query fails."""
    user_message = "The saved posts store rejected the request."

    def __init__(self, message: Optional[str] = None, sqlstate: Optional[str] = None,
                 details: Optional[str] = None):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.details = details


class RecordNotFoundError(DatabaseError):
    """Raised when a saved post to delete does not exist."""
    user_message = "That saved post no longer exists."
