"""Dream analyzer: voice recordings to structured dream analyses."""

from dream_analyzer.exceptions import (
    AnalysisParseError,
    DreamAccessDeniedError,
    DreamNotFoundError,
    DreamPipelineError,
    InputError,
    PersistenceError,
    UpstreamServiceError,
)
from dream_analyzer.logging import setup_logging

__all__ = [
    "setup_logging",
    "AnalysisParseError",
    "DreamAccessDeniedError",
    "DreamNotFoundError",
    "DreamPipelineError",
    "InputError",
    "PersistenceError",
    "UpstreamServiceError",
]
