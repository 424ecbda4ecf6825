import logging

from storefront.utils.config import settings

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format=LOG_FORMAT,
)

# SQL echo is only useful when debugging queries by hand.
logging.getLogger("django.db.backends").setLevel(logging.WARNING)


def get_logger(name: str):
    return logging.getLogger(name)
