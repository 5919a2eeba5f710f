"""FastAPI application: analysis and user onboarding endpoints."""

from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Dict, Optional, Type

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from scanmyfood import __version__
from scanmyfood.api import analysis, users
from scanmyfood.config import Settings, get_settings
from scanmyfood.domain.analysis.service import FoodAnalysisService
from scanmyfood.domain.shared.errors import (
    ConfigurationError,
    ConflictError,
    DomainError,
    ExtractionError,
    NotFoundError,
    ParseError,
    TransportError,
    ValidationError,
)
from scanmyfood.domain.user.ports import IUserRepository
from scanmyfood.infrastructure.ai.openai_client import OpenAIClient
from scanmyfood.infrastructure.user.repository_factory import create_user_repository
from scanmyfood.logging_config import configure_logging

logger = structlog.get_logger(__name__)

ERROR_STATUS: Dict[Type[DomainError], int] = {
    ConfigurationError: 500,
    TransportError: 502,
    ExtractionError: 502,
    ParseError: 502,
    NotFoundError: 404,
    ConflictError: 409,
    ValidationError: 422,
}


def status_for(error: DomainError) -> int:
    """Map an error to its HTTP status via the class hierarchy."""
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    logger.warning(
        "Request failed",
        path=request.url.path,
        error=exc.kind,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app(
    settings: Optional[Settings] = None,
    analysis_service: Optional[FoodAnalysisService] = None,
    user_repository: Optional[IUserRepository] = None,
) -> FastAPI:
    """Build the application.

    Services may be injected (tests); otherwise they are created from
    settings during startup. A missing OPENAI_API_KEY does not prevent
    startup: analysis endpoints answer with a configuration error while
    user endpoints keep working.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Only resources created here are released at shutdown
        async with AsyncExitStack() as stack:
            if app.state.user_repository is None:
                repository = create_user_repository(settings)
                stack.push_async_callback(repository.close)
                app.state.user_repository = repository

            if app.state.analysis_service is None:
                try:
                    client = OpenAIClient.from_settings(settings)
                except ConfigurationError as e:
                    logger.warning("Analysis disabled", reason=e.message)
                    app.state.analysis_error = e
                else:
                    await stack.enter_async_context(client)
                    app.state.analysis_service = FoodAnalysisService(client)

            logger.info(
                "Startup complete",
                version=__version__,
                user_repository=type(app.state.user_repository).__name__,
                analysis_enabled=app.state.analysis_service is not None,
            )
            yield

    app = FastAPI(title="scanmyfood", version=__version__, lifespan=lifespan)
    app.state.user_repository = user_repository
    app.state.analysis_service = analysis_service
    app.state.analysis_error = None

    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.include_router(analysis.router)
    app.include_router(users.router)

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


def main() -> None:  # pragma: no cover
    """Run with uvicorn (``scanmyfood-server``)."""
    import os

    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )


if __name__ == "__main__":  # pragma: no cover
    main()
