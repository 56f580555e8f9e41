"""FastAPI dependencies: API key auth and the per-request config store."""

import logging
from pathlib import Path

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from homescreen.core.config import settings
from homescreen.core.security import verify_api_key
from homescreen.services.config_store import ConfigStore

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_config_store() -> ConfigStore:
    """A store rooted at ``settings.DATA_DIR``. Tests override this dependency."""
    return ConfigStore(Path(settings.DATA_DIR))


async def require_api_key(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    """Reject the request with 401 unless it carries ``Bearer <CONFIG_API_KEY>``."""
    if credentials is None:
        logger.warning("Rejected %s %s: missing bearer token", request.method, request.url.path)
        raise HTTPException(
            status_code=401,
            detail="Missing or malformed Authorization header. Expected: Bearer <api-key>",
            headers=_BEARER_CHALLENGE,
        )

    if not verify_api_key(credentials.credentials):
        logger.warning("Rejected %s %s: invalid API key", request.method, request.url.path)
        raise HTTPException(status_code=401, detail="Invalid API key", headers=_BEARER_CHALLENGE)
