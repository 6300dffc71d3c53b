"""Gemini LLM service implementation."""

from google import genai

from ..exceptions import UpstreamServiceError
from ..logging import setup_logging
from .interfaces import LLMService

logger = setup_logging()

SERVICE_NAME = "gemini"


class GeminiLLMService(LLMService):
    """LLM service implementation using Google Gemini."""

    def __init__(self, client: genai.Client, model_name: str):
        self._client = client
        self._model_name = model_name

    def generate(
        self,
        system_instruction: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Sends the prompt to Gemini and returns the raw response text.

        Raises:
            UpstreamServiceError: If the Gemini API call fails or returns nothing.
        """
        try:
            response = self._client.models.generate_content(
                model=self._model_name,
                contents=user_prompt,
                config={
                    "system_instruction": system_instruction,
                    "temperature": temperature,
                    "max_output_tokens": max_tokens,
                    "response_mime_type": "application/json",
                },
            )
            if not response.text:
                raise UpstreamServiceError(SERVICE_NAME, "Gemini returned empty response")
            logger.info(
                "LLM generation completed",
                extra={"model": self._model_name, "response_chars": len(response.text)},
            )
            return response.text
        except UpstreamServiceError:
            raise
        except Exception as e:
            logger.exception("Gemini API call failed")
            raise UpstreamServiceError(SERVICE_NAME, f"Gemini generation failed: {e}", e) from e
