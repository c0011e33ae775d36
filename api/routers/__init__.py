"""API Routers Package.

Usage in main.py:
    from api.routers import tasks_router, categories_router

    app.include_router(tasks_router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(categories_router, prefix="/api/categories", tags=["tasks"])
"""

from .tasks import categories_router
from .tasks import router as tasks_router

__all__ = [
    "tasks_router",
    "categories_router",
]
