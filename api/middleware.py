import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request

log = logging.getLogger("api.requests")

def register_request_logger(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_request(request: Request, call_next):
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        log.info("%s %s - %s", request.method, path, datetime.now(timezone.utc).isoformat())
        return await call_next(request)
