"""Main FastAPI application with modularized routes."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.context import ContentContext, build_context
from api.database import SessionLocal, init_db
from api.errors import register_exception_handlers
from api.routes import auth, catalog, content, sessions
from core.logging_setup import setup_console_logging


def create_app(context: ContentContext | None = None) -> FastAPI:
    """Build the API. ``context`` replaces the default content services."""
    app = FastAPI(title="SSB Practice API")

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.content = context or build_context(SessionLocal)
    register_exception_handlers(app)

    @app.on_event("startup")
    def startup_events() -> None:
        """Initialize database on startup."""
        init_db()

    @app.on_event("shutdown")
    def shutdown_events() -> None:
        """Stop the store worker pool."""
        app.state.content.close()

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # Include routers
    app.include_router(auth.router)
    app.include_router(content.router)
    app.include_router(sessions.router)
    app.include_router(catalog.router)
    return app


setup_console_logging()

app = create_app()
