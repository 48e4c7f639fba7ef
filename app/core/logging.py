"""
Logging - console configuration and structured OAuth event records.

Every module logs through logging.getLogger("gateway.<area>"). This module
configures the shared "gateway" logger once and provides OAuthEventLogger,
which writes JSON-encoded records for the Google connection flow.

The OAuth callback never shows an error to the user (the popup just
closes), so these records are the only place a failed grant is visible.
Each record carries:
- event: what happened ("oauth_callback", "oauth_callback_failed", ...)
- kind: machine-readable failure category
- correlation_id: id tying together all records of one callback
- user_id: the user the grant was for, when known
- timestamp: UTC ISO-8601

Tokens, passwords and hashes are never included.
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler to the "gateway" logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger("gateway")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger


def new_correlation_id() -> str:
    return uuid.uuid4().hex[:12]


class OAuthEventLogger:
    """
    Structured logger for the Google OAuth connection flow.

    Usage:
        events = OAuthEventLogger()
        cid = new_correlation_id()
        events.log_success(cid, user_id="42", stored_refresh_token=True)
        events.log_failure(cid, kind="token_exchange_failed", user_id="42", error=str(e))
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("gateway.oauth")

    def _emit(self, level: int, event: str, correlation_id: str, **fields: Any) -> None:
        log_data: Dict[str, Any] = {
            "event": event,
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        log_data.update({key: value for key, value in fields.items() if value is not None})
        self._logger.log(level, f"OAuth: {json.dumps(log_data, default=str)}")

    def log_success(
        self,
        correlation_id: str,
        user_id: Optional[str],
        stored_refresh_token: bool,
    ) -> None:
        self._emit(
            logging.INFO,
            "oauth_callback",
            correlation_id,
            user_id=user_id,
            stored_refresh_token=stored_refresh_token,
        )

    def log_failure(
        self,
        correlation_id: str,
        kind: str,
        user_id: Optional[str] = None,
        error: Optional[str] = None,
    ) -> None:
        """
        Record a callback failure.

        Args:
            correlation_id: Id of this callback invocation
            kind: Failure category, e.g. "consent_denied",
                  "invalid_state", "token_exchange_failed", "persist_failed"
            user_id: The state parameter, if one was supplied
            error: Exception text or provider error description
        """
        self._emit(
            logging.WARNING,
            "oauth_callback_failed",
            correlation_id,
            kind=kind,
            user_id=user_id,
            error=error,
        )
