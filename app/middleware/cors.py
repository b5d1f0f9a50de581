"""CORS middleware configuration"""
from fastapi.middleware.cors import CORSMiddleware
from app.config import get_settings


def setup_cors(app):
    """
    Configure CORS middleware for the application

    The registration form is served from a different origin than this API.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
