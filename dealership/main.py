"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dealership.api import auth, inventory
from dealership.config import Settings, get_settings
from dealership.context import AppContext
from dealership.exceptions import AuthenticationError, DealershipError, ValidationError

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Translate service errors into HTTP responses."""

    @app.exception_handler(DealershipError)
    async def dealership_error_handler(request: Request, exc: DealershipError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
            )
            return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

        headers = None
        if isinstance(exc, AuthenticationError) and exc.status_code == 401:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationError.from_errors(exc.errors())
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "An unexpected error occurred"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    settings = settings or get_settings()
    context = AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the store before serving and release it on shutdown."""
        configure_logging(settings)
        context.init()
        logger.info(f"Dealership API started ({settings.environment})")
        yield
        context.close()

    app = FastAPI(
        title="Dealership API",
        description="Car dealership listings with signup, login and inventory management",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router)
    app.include_router(inventory.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


app = create_app()
