import logging
import logging.config


class ShortNameFilter(logging.Filter):
    def filter(self, record):
        path = record.name.split(".")
        record.shortname = "-".join(path[-2:])
        return True


LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "shortname": {"()": ShortNameFilter},
    },
    "formatters": {
        "custom": {
            "format": "[%(asctime)s] [%(levelname)s] %(shortname)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "custom",
            "filters": ["shortname"],
        },
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    # httpx logs every request at INFO, far too chatty for a full backfill
    "loggers": {"httpx": {"level": "WARNING"}},
}


def setup_logging(level: str | None = None) -> None:
    logging.config.dictConfig(LOGGING_CONFIG)
    if level:
        logging.getLogger().setLevel(level.upper())
