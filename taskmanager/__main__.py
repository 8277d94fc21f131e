import logging

import uvicorn

from taskmanager.config import Settings
from taskmanager.logging_setup import setup_logging
from taskmanager.main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    # StorageInitError propagates and stops the process before listening
    app = create_app(settings)
    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
