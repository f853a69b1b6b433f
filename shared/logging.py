"""
Unified structured logging for the expense API.

Call configure_root_logger() once at startup; modules then use the
standard ``logging.getLogger(__name__)`` and pass structured fields
through ``extra``.

Usage:
    logger.info("Expense created", extra={
        "expense_id": expense.id,
        "user_id_hash": hash_user_id(owner_id),
        "correlation_id": correlation_id,
    })

PII BLOCKLIST - NEVER LOG:
- User email addresses
- Passwords or password hashes
- Bearer tokens and the signing secret
- Raw user ids (use hash_user_id())
"""

from __future__ import annotations

import hashlib
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict


def hash_user_id(user_id: int | str | None) -> str:
    """
    Create anonymized user identifier.

    Returns first 16 characters of SHA-256 hash.
    Sufficient for correlation without exposing raw ID.
    """
    if user_id is None or user_id == "":
        return "unknown"
    return hashlib.sha256(str(user_id).encode()).hexdigest()[:16]


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for API logs.

    Produces logs in format:
    {
        "timestamp": "2026-01-30T14:23:45.123Z",
        "level": "INFO",
        "service": "api",
        "logger": "app.api.services.expenses",
        "message": "Expense created",
        ...optional fields...
    }
    """

    # Fields that are allowed in log output
    ALLOWED_EXTRA_FIELDS = frozenset([
        "correlation_id",
        "user_id_hash",
        "expense_id",
        "error_code",
        "error",
        "http_method",
        "http_path",
        "http_status",
        "latency_ms",
    ])

    # Fields that must NEVER appear (safety check)
    BLOCKED_FIELDS = frozenset([
        "user_id",  # Use user_id_hash instead
        "email",
        "password",
        "password_hash",
        "secret",
        "token",
    ])

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in self.ALLOWED_EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        for field in self.BLOCKED_FIELDS:
            if hasattr(record, field):
                log_entry["_pii_warning"] = f"Blocked field '{field}' was stripped"

        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, separators=(",", ":"), ensure_ascii=False, default=str)


def configure_root_logger(service: str, level: str = "INFO") -> None:
    """
    Configure the root logger with structured formatting.

    Call this once at application startup.

    Args:
        service: Service identifier
        level: Log level string (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(service))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(numeric_level)

    # Suppress noisy libraries
    for lib in ["httpx", "httpcore", "asyncio", "sqlalchemy.engine", "aiosqlite"]:
        logging.getLogger(lib).setLevel(logging.WARNING)
