from .dream_repository import DreamRepository

__all__ = ["DreamRepository"]
