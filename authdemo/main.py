"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers and the
server-rendered pages. See authdemo.core.lifespan and
authdemo.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from authdemo.api.router import api_router
from authdemo.core.config import get_settings
from authdemo.core.exception_handlers import register_exception_handlers
from authdemo.core.lifespan import create_lifespan
from authdemo.core.limiter import limiter
from authdemo.middleware import RequestIDMiddleware
from authdemo.pages import render_data_deletion, render_privacy_policy, render_root_page


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # First added = innermost. Request ID wraps CORS so preflight responses carry it too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=HTMLResponse)
    def root() -> HTMLResponse:
        """Landing page with links to the API documentation."""
        return HTMLResponse(content=render_root_page(settings.app_name))

    @app.get("/privacy-policy", response_class=HTMLResponse)
    def privacy_policy() -> HTMLResponse:
        return HTMLResponse(content=render_privacy_policy(settings.app_name))

    @app.get("/data-deletion", response_class=HTMLResponse)
    def data_deletion() -> HTMLResponse:
        return HTMLResponse(content=render_data_deletion(settings.app_name))

    return app


app = create_app()
