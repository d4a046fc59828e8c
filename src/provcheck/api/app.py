"""FastAPI app factory for the provcheck review API."""

from fastapi import FastAPI

from provcheck import __version__
from provcheck.api.collections import router as collections_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(title="provcheck Collection Review API", version=__version__)
    app.include_router(collections_router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    return app


# For uvicorn, expose `app` at module level
app = create_app()

__all__ = ["app", "create_app"]
