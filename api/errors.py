"""Content rotation errors and their HTTP translation."""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class ContentError(Exception):
    """Base class for content selection and persistence errors."""

    def __init__(self, test_type: str, message: str) -> None:
        super().__init__(message)
        self.test_type = test_type
        self.message = message


class EmptyCatalog(ContentError):
    """No content exists at all for a test type."""

    def __init__(self, test_type: str) -> None:
        super().__init__(
            test_type,
            f"No practice content is available for {test_type.upper()}. "
            "Please contact an administrator.",
        )


class AllItemsSeen(ContentError):
    """The user has completed every item in the catalog."""

    def __init__(self, test_type: str) -> None:
        super().__init__(
            test_type,
            "You have completed all available practice sets for "
            f"{test_type.upper()}! Check back once new content is added.",
        )


class HistoryUnavailable(ContentError):
    """Reading or writing the seen history failed. Never shown to users."""


class SessionPersistFailure(ContentError):
    """The session log write failed; results were not saved."""


class StoreTimeout(Exception):
    """A bounded call against an external store did not finish in time."""


def register_exception_handlers(app: FastAPI) -> None:
    """Map blocking content errors to JSON responses."""

    @app.exception_handler(EmptyCatalog)
    async def _empty_catalog(request: Request, exc: EmptyCatalog) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message, "error": "empty_catalog"},
        )

    @app.exception_handler(AllItemsSeen)
    async def _all_seen(request: Request, exc: AllItemsSeen) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": exc.message, "error": "all_items_seen"},
        )
