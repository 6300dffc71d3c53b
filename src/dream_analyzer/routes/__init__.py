from .dreams import router as dreams_router

__all__ = ["dreams_router"]
