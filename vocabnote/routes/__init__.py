"""Route handlers for the vocabnote server."""

from vocabnote.routes.dictionary import router as dictionary_router
from vocabnote.routes.notebook import router as notebook_router

__all__ = [
    "dictionary_router",
    "notebook_router",
]
