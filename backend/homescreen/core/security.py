"""Shared-secret API key verification.

The key lives only in server settings and is never sent to the browser.
"""

import secrets

from homescreen.core.config import settings


def verify_api_key(provided: str) -> bool:
    """Constant-time comparison against ``settings.CONFIG_API_KEY``."""
    if not provided or not settings.CONFIG_API_KEY:
        return False
    return secrets.compare_digest(provided.encode(), settings.CONFIG_API_KEY.encode())
