import logging
import uvicorn

from api.deps import get_settings
from api.main import configure_logging

log = logging.getLogger("api")

if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    log.info("Server is running on http://%s:%d", settings.host, settings.port)
    uvicorn.run("api.main:app", host=settings.host, port=settings.port)
