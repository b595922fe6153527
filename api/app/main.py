import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .config import load_settings
from .errors import MotesError, UpstreamError
from .routes import include_modular_routers

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging(load_settings().log_level)

app = FastAPI(title="Motes Match API")
include_modular_routers(app)

# Public form posts from the static site; no cookies involved.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(MotesError)
def handle_motes_error(request: Request, exc: MotesError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("[%s] %s: %s", request.url.path, type(exc).__name__, exc.message)
    content = {"ok": False, "error": exc.message}
    if isinstance(exc, UpstreamError) and exc.upstream_status is not None:
        content["upstreamStatus"] = exc.upstream_status
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(SQLAlchemyError)
def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("[%s] storage error", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
