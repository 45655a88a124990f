"""
Core routers for the application.

This module exports the FastAPI routers shared by every app.
"""

from app.core.routers.user import router as user_router

__all__ = ["user_router"]
