# FastAPI Routers
from pagebuilder.routers.pages import router as pages_router

__all__ = [
    "pages_router",
]
