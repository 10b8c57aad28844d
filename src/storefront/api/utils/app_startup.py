"""Loguru setup shared by the HTTP app."""

import logging
import re
import sys
from pathlib import Path

from loguru import logger

from src.storefront.runtime.config.config_data import LoggingConfig
from src.storefront.runtime.context import get_config

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "multipart": logging.WARNING,
    "python_multipart": logging.WARNING,
    "uvicorn.access": logging.CRITICAL,
}

_BASIC_CREDENTIALS = re.compile(r"(?i)(basic\s+)[A-Za-z0-9+/=]+")


def _redact_credentials(record) -> None:
    """Keep admin Basic credentials out of every sink."""
    record["extra"].setdefault("request_id", "-")
    record["message"] = _BASIC_CREDENTIALS.sub(r"\1[redacted]", record["message"])


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # uvicorn reports request errors again after the middleware logged them
        if record.name == "uvicorn.error" and record.levelno >= logging.ERROR:
            return
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).bind(logger_name=record.name).log(
            level, record.getMessage()
        )


def _add_file_sink(cfg: LoggingConfig, diagnose: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    serialize = cfg.format == "json"
    logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if serialize else PLAIN_FORMAT,
        serialize=serialize,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=diagnose,
        diagnose=diagnose,
    )


def configure_logging() -> None:
    """Route application and library logs through loguru.

    Console output is always human readable; ``logging.file`` adds a rotating
    file sink in ``logging.format``.
    """
    config = get_config()
    cfg = config.logging
    diagnose = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"}, patcher=_redact_credentials)
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=PLAIN_FORMAT,
        colorize=True,
        backtrace=diagnose,
        diagnose=diagnose,
    )
    if cfg.file:
        _add_file_sink(cfg, diagnose)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    logger.info(
        "Logging configured",
        level=cfg.level,
        format=cfg.format,
        file=cfg.file,
        environment=config.app.environment,
    )
