import logging
import sys
from flask import Flask, current_app

LOGGER_NAME = "login-backend"
LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger de la app si hay contexto Flask; si no, uno estándar."""
    try:
        return current_app.logger
    except RuntimeError:
        return logging.getLogger(name or LOGGER_NAME)


def configure_logging(app: Flask, level: str = "INFO") -> None:
    """Logs de la app y de librerías (authlib, urllib3) a stdout."""
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(message)s")

    # app.logger se comparte entre instancias con el mismo import_name
    if not app.logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app.logger.addHandler(handler)
    app.logger.setLevel(level)
    logging.getLogger(LOGGER_NAME).setLevel(level)
