"""Core business logic for structured dream analysis."""

from ..exceptions import InputError
from ..infrastructure.interfaces import LLMService
from ..logging import setup_logging
from .analysis_contract import StructuredAnalysis, parse_structured_analysis
from .models import count_words
from .prompts import build_analysis_prompt

logger = setup_logging()

ANALYSIS_TEMPERATURE = 0.7
ANALYSIS_MAX_TOKENS = 4000


class DreamAnalyzer:
    """Turns a dream transcript into a validated StructuredAnalysis via an LLM."""

    def __init__(
        self,
        llm_service: LLMService,
        system_instruction: str,
        temperature: float = ANALYSIS_TEMPERATURE,
        max_tokens: int = ANALYSIS_MAX_TOKENS,
    ):
        self._llm = llm_service
        self._system_instruction = system_instruction
        self._temperature = temperature
        self._max_tokens = max_tokens

    def analyze(self, transcript: str, duration_seconds: float) -> StructuredAnalysis:
        """
        Analyzes a dream transcript.

        Args:
            transcript: The dream transcript text.
            duration_seconds: Recording duration declared by the caller.

        Returns:
            StructuredAnalysis parsed and validated from the LLM response.

        Raises:
            InputError: If the transcript is empty.
            UpstreamServiceError: If the LLM call fails.
            AnalysisParseError: If the response does not match the contract.
        """
        if not transcript or not transcript.strip():
            raise InputError("No transcript provided")

        word_count = count_words(transcript)
        prompt = build_analysis_prompt(transcript, duration_seconds, word_count)

        raw_response = self._llm.generate(
            system_instruction=self._system_instruction,
            user_prompt=prompt,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )

        try:
            analysis = parse_structured_analysis(raw_response)
        except Exception:
            logger.exception(
                "Analysis response rejected",
                extra={"response_preview": raw_response[:500]},
            )
            raise

        logger.info(
            "Dream analysis completed",
            extra={
                "word_count": word_count,
                "dream_type": analysis.overview.dream_type.value,
            },
        )
        return analysis
