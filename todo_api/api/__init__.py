"""API layer - FastAPI endpoints."""

from .labels import router as labels_router
from .todos import router as todos_router

__all__ = [
    "todos_router",
    "labels_router",
]
