from __future__ import annotations

import base64
from typing import Optional, Tuple

from webhook_notifier.services.notifications.base import AuthorizationMethod

AuthHeader = Tuple[str, str]


def build_authorization(
    method: AuthorizationMethod,
    username: Optional[str] = None,
    password: Optional[str] = None,
    token: Optional[str] = None,
) -> Optional[AuthHeader]:
    """Return the (scheme, parameter) pair for an Authorization header, or None.

    Basic encodes "username:password" as ASCII (non-ASCII characters become
    "?") then base64. Bearer passes the token through untouched. Missing
    credentials are treated as empty strings; they are not validated here.
    """
    if method is AuthorizationMethod.BASIC:
        raw = f"{username or ''}:{password or ''}".encode("ascii", errors="replace")
        return "Basic", base64.b64encode(raw).decode("ascii")
    if method is AuthorizationMethod.BEARER:
        return "Bearer", token or ""
    return None


def format_authorization(header: AuthHeader) -> str:
    scheme, parameter = header
    if not parameter:
        return scheme
    return f"{scheme} {parameter}"
