"""Logging setup and the audit log mirror."""

import logging
import sys
from typing import Any

from eventcare.core.config import settings

# Record attributes copied into structured output when a caller passes them
CONTEXT_FIELDS = ("user_id", "action", "resource", "resource_id", "event_id", "patient_id")


class StructuredFormatter(logging.Formatter):
    """One ``key=value`` line per record, followed by any care-record context."""

    def format(self, record: logging.LogRecord) -> str:
        fields = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                fields[name] = value

        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)

        return " ".join(f"{key}={value}" for key, value in fields.items())


def setup_logging() -> None:
    """Configure the root logger from settings.

    Dev gets a readable single-line format; every other environment gets
    StructuredFormatter so access denials and record changes can be
    filtered by event and patient.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if settings.is_dev:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    else:
        handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def record_context(details: dict[str, Any] | None) -> dict[str, Any]:
    """Pick the event and patient IDs out of audit details for log extras."""
    if not details:
        return {}
    return {key: details[key] for key in ("event_id", "patient_id") if details.get(key)}


class AuditLogger:
    """Mirrors each audit row to the ``audit`` logger."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("audit")

    def log(
        self,
        action: str,
        resource: str,
        actor_id: str | None,
        resource_id: str | None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.logger.info(
            f"AUDIT: {action} {resource}:{resource_id} by {actor_id or 'anonymous'}",
            extra={
                "user_id": actor_id,
                "action": action,
                "resource": resource,
                "resource_id": resource_id,
                **record_context(details),
            },
        )


audit_logger = AuditLogger()
