"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from rich.logging import RichHandler

from mock_interview.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structured logging with rich output.

    Args:
        level: Overrides ``settings.log_level``
    """
    log_level = getattr(logging, (level or settings.log_level).upper())

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        # stderr is looked up per logger so redirected streams are honoured
        logger_factory=lambda *args: structlog.WriteLogger(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_session_state(session: Any) -> Dict[str, Any]:
    """Create a log context for an interview session."""
    questions = getattr(session, "questions", None) or []
    answered = sum(1 for q in questions if getattr(q, "is_answered", False))
    status = getattr(session, "status", None)

    return {
        "session_state": {
            "session_id": getattr(session, "id", None),
            "status": getattr(status, "value", status),
            "answered_questions": answered,
            "total_questions": len(questions),
            "version": getattr(session, "version", None),
        }
    }
