"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from typing import Optional
from fastapi import Request
import logging

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "register",
    "login_success",
    "login_failure",
    "login_inactive",
    "token_rejected",
    "access_denied",
}


def client_ip(request: Request) -> Optional[str]:
    """Client address, falling back to the first X-Forwarded-For hop."""
    ip_address = None
    if request.client:
        ip_address = request.client.host

    # Check for X-Forwarded-For header (proxy/load balancer scenarios)
    if not ip_address and request.headers.get("x-forwarded-for"):
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()
    return ip_address


def log_auth_event(
    event_type: str,
    request: Request,
    user_id: Optional[int] = None,
    email: Optional[str] = None,
    detail: Optional[str] = None,
) -> None:
    """
    Write one authentication event line to the service log.

    Args:
        event_type: One of ALLOWED_EVENT_TYPES
        request: FastAPI Request object, used for client IP and user agent
        user_id: Identity involved, when known
        email: Email involved, when known
        detail: Optional short reason (never a password or token)

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    level = logging.INFO if event_type in ("register", "login_success") else logging.WARNING
    logger.log(
        level,
        "AUTH %s user_id=%s email=%s ip=%s user_agent=%s detail=%s timestamp=%s",
        event_type,
        user_id,
        email,
        client_ip(request),
        request.headers.get("user-agent"),
        detail,
        datetime.now(timezone.utc).isoformat(),
    )
