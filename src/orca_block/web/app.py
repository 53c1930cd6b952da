"""FastAPI application for the orca-block JSON API."""

import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from .. import __version__
from ..data import load_catalog
from ..errors import BlockValidationError
from ..models.block import BLOCK_TEMPLATES
from ..models.exercises import ExerciseCatalog
from .routers import metabolic, planning


def create_app(catalog: ExerciseCatalog | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        catalog: Exercise catalog for slot resolution; defaults to the file
            named by ORCA_BLOCK_CATALOG, else the built-in catalog
    """
    app = FastAPI(
        title="orca-block",
        description="Barbell periodization scheduler and load optimizer",
        version=__version__,
    )

    # Store the catalog in app state for use in routers
    if catalog is None:
        catalog = load_catalog(os.environ.get("ORCA_BLOCK_CATALOG"))
    app.state.catalog = catalog

    app.include_router(planning.router)
    app.include_router(metabolic.router)

    @app.exception_handler(BlockValidationError)
    async def block_validation_error(request: Request, exc: BlockValidationError):
        """Structured field errors for invalid blocks."""
        logger.info("Rejected block on {}: {}", request.url.path, exc)
        return JSONResponse(status_code=422, content=exc.to_dict())

    @app.get("/templates")
    async def templates():
        """Built-in training block templates."""
        return {
            "templates": [
                {
                    "id": template_id,
                    "name": template["name"],
                    "total_weeks": sum(p.week_count for p in template["phases"]),
                    "phases": [p.to_dict() for p in template["phases"]],
                }
                for template_id, template in BLOCK_TEMPLATES.items()
            ]
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
