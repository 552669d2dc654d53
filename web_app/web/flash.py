"""One-redirect flash messages stored in a short-lived cookie."""

import base64
import binascii
import json
from typing import Dict, Optional

from starlette.requests import Request
from starlette.responses import Response

FLASH_COOKIE = "shortener_flash"
FLASH_MAX_AGE = 60


def set_flash(
    response: Response,
    info: Optional[str] = None,
    error: Optional[str] = None,
) -> None:
    """Attach InfoMessage / ErrorMessage to be shown on the next page."""
    messages = {}
    if info:
        messages["InfoMessage"] = info
    if error:
        messages["ErrorMessage"] = error
    if not messages:
        return
    value = base64.urlsafe_b64encode(json.dumps(messages).encode("utf-8")).decode("ascii")
    response.set_cookie(FLASH_COOKIE, value, max_age=FLASH_MAX_AGE, httponly=True, samesite="lax")


def read_flash(request: Request) -> Dict[str, str]:
    """Messages left by the previous request; garbage cookies read as empty."""
    raw = request.cookies.get(FLASH_COOKIE)
    if not raw:
        return {}
    try:
        messages = json.loads(base64.urlsafe_b64decode(raw.encode("ascii")))
    except (binascii.Error, UnicodeError, ValueError):
        return {}
    if not isinstance(messages, dict):
        return {}
    return {k: str(v) for k, v in messages.items() if k in ("InfoMessage", "ErrorMessage")}


def clear_flash(request: Request, response: Response) -> None:
    if FLASH_COOKIE in request.cookies:
        response.delete_cookie(FLASH_COOKIE)
