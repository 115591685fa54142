"""
Shared-secret authentication for the workout webhook.

The caller may send the secret either as ``X-Webhook-Secret: <secret>`` or as
``Authorization: Bearer <secret>``. When no secret is configured every
request is accepted.
"""
import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token part of a ``Bearer`` Authorization header, if any."""
    if authorization and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):]
    return None


def is_authorized(
    secret: Optional[str],
    authorization: Optional[str] = None,
    x_webhook_secret: Optional[str] = None,
) -> bool:
    """
    Check the provided credential against the configured webhook secret.

    Args:
        secret: Configured WEBHOOK_SECRET (None/empty disables the check)
        authorization: Raw Authorization header
        x_webhook_secret: Raw X-Webhook-Secret header

    Returns:
        True if the request may proceed.
    """
    if not secret:
        return True

    provided = x_webhook_secret or extract_bearer_token(authorization)
    if provided is None:
        logger.warning("Webhook request without credentials rejected")
        return False

    if not hmac.compare_digest(provided.encode("utf-8"), secret.encode("utf-8")):
        logger.warning("Webhook request with invalid secret rejected")
        return False
    return True
