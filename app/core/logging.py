import logging
import time

from fastapi import FastAPI, Request

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

access_logger = logging.getLogger("app.access")


def configure_logging(level: str = "INFO"):
    """Install a single stream handler on the root logger."""
    root = logging.getLogger()
    if not any(getattr(h, "_kanban", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._kanban = True
        root.addHandler(handler)
    root.setLevel(level.upper())


def add_request_logging(app: FastAPI):
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_logger.info(
            "%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms
        )
        return response
