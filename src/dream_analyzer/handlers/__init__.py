"""Handler exports."""

from .audio_store import AudioStore, HeldAudio
from .dream_journal import DreamJournal
from .dream_pipeline_handler import DreamPipelineHandler

__all__ = ["AudioStore", "DreamJournal", "DreamPipelineHandler", "HeldAudio"]
