"""
Service Protocol Definitions

This module defines typing.Protocol interfaces for services used in the Post
Remixer application. These protocols enable loose coupling, dependency
injection, and easier testing.

Protocols defined:
- CompletionService: Interface for text generation services
"""

from typing import Protocol


class CompletionService(Protocol):
    """Protocol defining the interface for text generation.

    Any model that accepts a single free-text prompt and returns free text
    can back this interface. Implementations raise
    utils.exceptions.AIServiceError subclasses on failure.
    """

    def generate_completion(self, prompt: str) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The full instruction string.

        Returns:
            The generated text.
        """
        ...
