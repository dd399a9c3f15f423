from __future__ import annotations

import logging
import re

from fastapi import HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import Settings
from .errors import AuthFailure


logger = logging.getLogger(__name__)

basic_scheme = HTTPBasic(realm="Restricted", auto_error=False)

# HTTPBasic accepts any casing of the scheme name; only "Basic" is honoured here.
_BASIC_RE = re.compile(r"^Basic\s+(.+)$")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def read_credentials(request: Request) -> HTTPBasicCredentials | None:
    authorization = request.headers.get("authorization")
    if not authorization or not _BASIC_RE.match(authorization):
        return None
    try:
        return await basic_scheme(request)
    except HTTPException:
        # Undecodable token or no "user:pass" separator.
        logger.debug("Rejected malformed Basic token")
        return None


def check_basic_auth(credentials: HTTPBasicCredentials | None, settings: Settings) -> None:
    # Plain equality, no rate limiting.
    if not settings.auth_enabled:
        return
    if credentials is None:
        raise AuthFailure("Authentication required")
    if credentials.username == settings.basic_user and credentials.password == settings.basic_pass:
        return
    logger.debug("Rejected invalid credentials for user %r", credentials.username)
    raise AuthFailure("Invalid credentials")


async def require_basic_auth(request: Request) -> None:
    settings = get_settings(request)
    if not settings.auth_enabled:
        return
    check_basic_auth(await read_credentials(request), settings)
