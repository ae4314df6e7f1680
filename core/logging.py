"""
Structured Logging Module for Compliance Hub.

Provides JSON-formatted structured logging for observability.
Key events: turn submission, agent call settlement, lenient extraction
repairs, and normalization fallbacks.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from core.config import settings


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    All logs are emitted as single-line JSON objects for easy parsing
    by log aggregation tools (CloudWatch, Datadog, etc.).
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class StructuredLogger:
    """
    Structured logger wrapper with domain-specific methods.

    Provides type-safe logging for conversation and normalization events.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool = False,
        **kwargs: Any
    ) -> None:
        """Internal log method with extra fields."""
        extra = {"extra_fields": kwargs}
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    # ===== Turn Events =====

    def turn_submitted(
        self,
        session_id: str,
        turn_id: str,
        mode_label: str,
        prefixed: bool
    ) -> None:
        """Log a new pending turn."""
        self._log(
            logging.INFO,
            f"Turn submitted: {turn_id} ({mode_label})",
            event="turn.submitted",
            session_id=session_id,
            turn_id=turn_id,
            mode_label=mode_label,
            prefixed=prefixed
        )

    def submission_rejected(
        self,
        session_id: str,
        reason: str,
        pending_turn_id: Optional[str] = None
    ) -> None:
        """Log a silently rejected submission (blank text, turn in flight)."""
        self._log(
            logging.DEBUG,
            f"Submission rejected: {reason}",
            event="turn.rejected",
            session_id=session_id,
            reason=reason,
            pending_turn_id=pending_turn_id
        )

    def turn_resolved(
        self,
        session_id: str,
        turn_id: str,
        structured: bool,
        duration_ms: Optional[float] = None
    ) -> None:
        """Log a turn resolved with a normalized response."""
        self._log(
            logging.INFO,
            f"Turn resolved: {turn_id}",
            event="turn.resolved",
            session_id=session_id,
            turn_id=turn_id,
            structured=structured,
            duration_ms=duration_ms
        )

    def turn_failed(
        self,
        session_id: str,
        turn_id: str,
        error: str,
        duration_ms: Optional[float] = None
    ) -> None:
        """Log a turn that settled as failed."""
        self._log(
            logging.WARNING,
            f"Turn failed: {turn_id}: {error}",
            event="turn.failed",
            session_id=session_id,
            turn_id=turn_id,
            error=error,
            duration_ms=duration_ms
        )

    def turn_retried(
        self,
        session_id: str,
        failed_turn_id: str,
        new_turn_id: str
    ) -> None:
        """Log a failed turn replaced by a fresh pending turn."""
        self._log(
            logging.INFO,
            f"Turn {failed_turn_id} retried as {new_turn_id}",
            event="turn.retried",
            session_id=session_id,
            failed_turn_id=failed_turn_id,
            new_turn_id=new_turn_id
        )

    # ===== Agent Events =====

    def agent_call_failed(
        self,
        session_id: str,
        turn_id: str,
        error: str,
        unexpected: bool = False
    ) -> None:
        """Log a transport failure. Unexpected errors carry a traceback."""
        self._log(
            logging.ERROR if unexpected else logging.WARNING,
            f"Agent call failed: {error}",
            exc_info=unexpected,
            event="agent.call_failed",
            session_id=session_id,
            turn_id=turn_id,
            error=error,
            unexpected=unexpected
        )

    def listener_failed(
        self,
        session_id: str,
        turn_id: str
    ) -> None:
        """Log an exception raised by a turn listener."""
        self._log(
            logging.ERROR,
            f"Turn listener raised for {turn_id}",
            exc_info=True,
            event="turn.listener_failed",
            session_id=session_id,
            turn_id=turn_id
        )

    # ===== Normalization Events =====

    def extraction_repaired(
        self,
        repair: str,
        raw_length: int
    ) -> None:
        """Log JSON recovered by a lenient repair step."""
        self._log(
            logging.DEBUG,
            f"Lenient extraction succeeded after repair '{repair}'",
            event="extraction.repaired",
            repair=repair,
            raw_length=raw_length
        )

    def extraction_failed(
        self,
        reason: str,
        raw_length: int
    ) -> None:
        """Log a string that no repair could turn into JSON."""
        self._log(
            logging.INFO,
            f"Lenient extraction failed: {reason}",
            event="extraction.failed",
            reason=reason,
            raw_length=raw_length
        )

    def normalization_fallback(
        self,
        source: str,
        text_length: int
    ) -> None:
        """Log a plain-text summary fallback."""
        self._log(
            logging.INFO,
            f"Normalization fell back to plain text from {source}",
            event="normalization.fallback",
            source=source,
            text_length=text_length
        )

    def normalization_crashed(
        self,
        session_id: str,
        turn_id: str,
        error: str
    ) -> None:
        """Log an unexpected exception while normalizing a payload."""
        self._log(
            logging.ERROR,
            f"Normalization raised for {turn_id}: {error}",
            exc_info=True,
            event="normalization.crashed",
            session_id=session_id,
            turn_id=turn_id,
            error=error
        )

    def normalization_empty(self) -> None:
        """Log a payload with nothing usable in it."""
        self._log(
            logging.WARNING,
            "Normalization found no usable response",
            event="normalization.empty"
        )


def setup_logging() -> None:
    """
    Configure application-wide logging.

    Should be called once at application startup.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper()))

    # Remove existing handlers
    root_logger.handlers = []

    # Add JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    # Set levels for noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        StructuredLogger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.turn_resolved("sess_abc", "turn-1", structured=True)
    """
    return StructuredLogger(name)
