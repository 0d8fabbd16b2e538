import logging
import sys
from collections.abc import Callable
from typing import Any

from loguru import logger

from app.config import get_settings


class InterceptHandler(logging.Handler):
    """Intercept stdlib logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


REDACTED = "***"


def _noise_log_filter(record: dict[str, Any]) -> bool:
    """Only show health checks and CORS preflight access logs at DEBUG level."""
    message = record.get("message", "")
    if "/health" in message or "\"OPTIONS " in message:
        return bool(record["level"].no <= 10)  # DEBUG level
    return True


def _redact_api_key(api_key: str) -> Callable[[dict[str, Any]], None]:
    """Build a patcher that masks the Mailgun API key in messages and bound values.

    Mailgun error bodies and transport errors can echo request details back.
    """

    def patcher(record: dict[str, Any]) -> None:
        if not api_key:
            return
        record["message"] = record["message"].replace(api_key, REDACTED)
        for key, value in record["extra"].items():
            if isinstance(value, str) and api_key in value:
                record["extra"][key] = value.replace(api_key, REDACTED)

    return patcher


def setup_logging() -> None:
    """Configure loguru for the application."""
    settings = get_settings()

    # Remove default handler
    logger.remove()
    logger.configure(patcher=_redact_api_key(settings.mailgun_api_key))

    if settings.debug:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level> | {extra}"
            ),
            backtrace=True,
            diagnose=True,
        )
    else:
        logger.add(
            sys.stderr,
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message} | {extra}",
            filter=_noise_log_filter,
            backtrace=True,
            # diagnose would dump local variables, including API keys
            diagnose=False,
        )

    # Intercept stdlib logging (uvicorn, httpx)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in [
        "uvicorn",
        "uvicorn.error",
        "uvicorn.access",
        "httpx",
    ]:
        logging.getLogger(name).handlers = [InterceptHandler()]


def get_logger(name: str) -> Any:
    """Get a logger bound to a name."""
    return logger.bind(name=name)
