import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.middleware import add_cors_middleware
from api.routes import router
from server import PORT, find_free_port, start_server

_logger = logging.getLogger(__name__)

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()


def create_app() -> FastAPI:
    app = FastAPI(title="Diastolic Paste Sidecar", version="1.2.0")
    add_cors_middleware(app)

    # Unhandled errors still come back as JSON.
    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        _logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error."},
        )

    app.include_router(router)
    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    port = PORT or find_free_port()
    app = create_app()
    start_server(app, port)
