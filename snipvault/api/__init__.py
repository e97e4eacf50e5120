"""API routes."""

from .snippets import router as snippets_router
from .versions import router as versions_router

__all__ = [
    "snippets_router",
    "versions_router",
]
