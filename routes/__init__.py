"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.imports import router as imports_router
from routes.spreadsheets import router as spreadsheets_router

__all__ = [
    "imports_router",
    "spreadsheets_router",
]
