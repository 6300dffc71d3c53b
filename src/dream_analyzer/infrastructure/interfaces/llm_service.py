"""Abstract interface for LLM service operations."""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """Abstract base class for text-generation backends."""

    @abstractmethod
    def generate(
        self,
        system_instruction: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Generates free text for a prompt.

        Raises:
            UpstreamServiceError: If the call fails or returns no text.
        """
