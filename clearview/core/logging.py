"""Structured logging configuration."""

import logging
import sys
from typing import Any


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure structured logging for the application."""
    logger = logging.getLogger("clearview")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    # Format: timestamp - level - module - message
    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


# Global logger instance; service modules log through children of it
logger = setup_logging()


def log_request(method: str, path: str, **kwargs: Any) -> None:
    """Log an incoming request."""
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.info(f"REQUEST {method} {path} {extra}".strip())


def log_response(
    method: str, path: str, status: int, duration_ms: float, **kwargs: Any
) -> None:
    """Log an outgoing response."""
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.info(
        f"RESPONSE {method} {path} status={status} duration_ms={duration_ms:.2f} {extra}".strip()
    )


def log_access(role: str, view: str, allowed: bool, **kwargs: Any) -> None:
    """Log a role check against an app view; denials at warning level."""
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    message = f"ACCESS role={role} view={view} allowed={allowed} {extra}".strip()
    if allowed:
        logger.debug(message)
    else:
        logger.warning(message)


def log_error(message: str, exc: Exception | None = None, **kwargs: Any) -> None:
    """Log an error with optional exception."""
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    if exc:
        logger.error(f"ERROR {message} {extra}".strip(), exc_info=exc)
    else:
        logger.error(f"ERROR {message} {extra}".strip())


def log_db_query(
    operation: str, collection: str, duration_ms: float | None = None
) -> None:
    """Log a document store operation."""
    duration = f"duration_ms={duration_ms:.2f}" if duration_ms else ""
    logger.debug(f"DB {operation} collection={collection} {duration}".strip())


def log_external_call(
    service: str, operation: str, success: bool, duration_ms: float | None = None
) -> None:
    """Log an external service call."""
    status = "success" if success else "failed"
    duration = f"duration_ms={duration_ms:.2f}" if duration_ms else ""
    logger.info(f"EXTERNAL {service} {operation} status={status} {duration}".strip())
