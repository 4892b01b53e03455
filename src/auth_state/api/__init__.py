"""API layer - Routing"""

from .routes import router

__all__ = ["router"]
