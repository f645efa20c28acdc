"""
Main entrypoint for the Classroom Users API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Run it with uvicorn, e.g.::

    uvicorn classroom_users_api.app.main:app --reload --port 3000

or simply ``python run.py``.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .services.user_service import UserService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Each call gets its own ``UserService`` and therefore its own
    in‑memory store, seeded with the classroom users when
    ``settings.seed_users`` is enabled.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the module level defaults.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None, access_log=settings.access_log)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )
    register_exception_handlers(app)

    app.state.settings = settings
    app.state.user_service = UserService.with_seed_data() if settings.seed_users else UserService()

    app.include_router(v1_router, prefix=settings.base_path)

    logger.info(
        "%s %s ready at %s/users (%d users loaded)",
        settings.project_name,
        settings.api_version,
        settings.base_path,
        len(app.state.user_service.store),
    )
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
