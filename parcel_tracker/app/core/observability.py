"""
Observability helpers for the parcel store.

Times each store operation and emits one structured log record per call.
"""

import time
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from parcel_tracker.app.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    StorageError,
)

# Configure structured logger
logger = logging.getLogger("parcel_tracker")


def configure_logging(level: str = "INFO") -> None:
    """Set the level of the package logger (e.g. from settings.log_level)."""
    logger.setLevel(level.upper())


@asynccontextmanager
async def track_operation(operation: str, **fields: Any) -> AsyncIterator[Dict[str, Any]]:
    """
    Time a store operation and log its outcome.

    Yields the log context so the caller can attach values that only become
    known inside the block (e.g. the assigned parcel number).
    """
    log_data: Dict[str, Any] = {"operation": operation, **fields}
    start_time = time.time()

    try:
        yield log_data
    except (NotFoundError, InvalidTransitionError) as exc:
        log_data["outcome"] = exc.error_code
        log_data["duration_ms"] = round((time.time() - start_time) * 1000, 2)
        logger.warning("Parcel Operation Rejected", extra=log_data)
        raise
    except StorageError as exc:
        log_data["outcome"] = exc.error_code
        log_data["duration_ms"] = round((time.time() - start_time) * 1000, 2)
        logger.error("Parcel Operation Failed", extra=log_data)
        raise

    log_data["outcome"] = "ok"
    log_data["duration_ms"] = round((time.time() - start_time) * 1000, 2)
    logger.info("Parcel Operation", extra=log_data)
