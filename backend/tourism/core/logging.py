import logging

from tourism.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
    # access lines drown out service logs at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
