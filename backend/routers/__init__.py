# backend/routers/__init__.py

from .pages import router as pages_router
from .upload import router as upload_router
