"""Shared-secret gate checked before a user may register."""

from __future__ import annotations

import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def check_secret(candidate: str, secret: Optional[str]) -> bool:
    """Constant-time comparison of a supplied password with the shared secret.

    An unset secret denies everyone.
    """
    if not secret:
        logger.warning("Registration secret is not configured, denying registration")
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))
