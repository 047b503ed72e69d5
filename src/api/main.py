import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

load_dotenv()

from api.backend import BackendAPI
from api.dependencies import get_settings
from api.routers import ops, reports, scheduling
from spark_ai.config import Settings

# Logging configuration
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

# Errors answered when the body does not even have the right JSON types
INVALID_BODY_ERRORS = {
    scheduling.ENDPOINT: "Missing required fields",
    reports.ENDPOINT: "No tasks provided",
}


async def _invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = INVALID_BODY_ERRORS.get(request.url.path, "Invalid request body")
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": message, "detail": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Optional[Settings] = None, backend: Optional[BackendAPI] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Spark Scheduler API")
    app.state.settings = settings
    app.state.backend = backend or BackendAPI(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _invalid_body_handler)

    app.include_router(ops.router)
    app.include_router(scheduling.router)
    app.include_router(reports.router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info(f"Spark API server running on port {settings.port}")
    if settings.llm_provider in {"anthropic", "openai"} and not settings.active_api_key:
        logger.warning(
            f"No API key set for provider {settings.llm_provider!r}; "
            "analysis requests will use fallback suggestions"
        )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
