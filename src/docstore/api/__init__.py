"""HTTP API — FastAPI application factory."""

from docstore.api.app import create_app

__all__ = ["create_app"]
